'''
a2h -- convert ANSI colored text to HTML

usage:
  a2h [options] [<files>...]
  a2h --bash-completion
  a2h (-h | --help)
  a2h --version

options:
  -f, --auto-flush           flush stdout after every row
  -t, --title <title>        HTML title (default: a2h)
  -g, --gamma <gamma>        gamma value for RGB conversion (default: 1.0)
  -b, --bg-color <color>     page background color (default: #000000)
  -c, --fg-color <color>     page foreground color (default: #ffffff)
  -s, --font-size <size>     text size (default: 9pt)
  --config <path>            read settings from <path> instead of ~/.a2hrc
  --bash-completion          print a bash completion script
  -h, --help                 show this help
  --version                  show the version

With no files, or when a file is -, standard input is read.
'''

import logging

L = logging.getLogger('a2h.tool')

import fileinput
import os
import sys

import docopt as DO

from a2h import __version__
from a2h import common
from a2h.config import Config, ConfigError
from a2h.filter import A2hFilter, render

PROG = 'a2h'

# command line flag -> config key
FLAG_KEYS = {
    '--title': 'title',
    '--gamma': 'gamma',
    '--bg-color': 'bg-color',
    '--fg-color': 'fg-color',
    '--font-size': 'font-size',
    }

FLAGS = (
    '-f', '--auto-flush',
    '-t', '--title',
    '-g', '--gamma',
    '-b', '--bg-color',
    '-c', '--fg-color',
    '-s', '--font-size',
    '--config',
    '--bash-completion',
    '-h', '--help',
    '--version',
    )

VALUE_FLAGS = (
    '-t', '--title',
    '-g', '--gamma',
    '-b', '--bg-color',
    '-c', '--fg-color',
    '-s', '--font-size',
    '--config',
    )

def error(message):
    sys.stderr.write('{}: {}\n'.format(PROG, message))

def bash_completion():
    return render('completion.bash', prog=PROG, flags=FLAGS,
                  value_flags=VALUE_FLAGS)

def load_config(args, environ):
    conf = Config()
    if args['--config']:
        conf.add_path(args['--config'])
    else:
        conf.add_default_path(environ)
    conf.add_environ(environ)
    for flag, key in FLAG_KEYS.items():
        if args[flag] is not None:
            conf[key] = args[flag]
    if args['--auto-flush']:
        conf['auto-flush'] = 'true'
    return conf

def make_writer(out, auto_flush):
    def writer(s):
        out.write(s)
        if auto_flush:
            out.flush()
    return writer

def convert_files(files, options, out):
    writer = make_writer(out, options.auto_flush)
    f = A2hFilter.from_options(options, writer)

    f.write_header()
    hook = fileinput.hook_encoded('utf-8', errors='replace')
    with fileinput.FileInput(files or ('-',), openhook=hook) as lines:
        for line in lines:
            f.process(line)
    f.write_footer()

    L.info('%d rows', f.num_rows)
    return f.num_rows

def main(argv, environ=None, out=None):
    args = DO.docopt(__doc__, argv=argv,
                     version='{} {}'.format(PROG, __version__))
    if environ is None:
        environ = os.environ
    if out is None:
        out = sys.stdout

    if args['--bash-completion']:
        out.write(bash_completion())
        return 0

    try:
        options = load_config(args, environ).options()
        convert_files(args['<files>'], options, out)
    except ConfigError as e:
        error(e)
        return 1
    except OSError as e:
        error(e)
        return 1

    return 0

def run():
    common.initialize()
    if hasattr(sys.stdin, 'reconfigure'):
        sys.stdin.reconfigure(errors='replace')
    sys.exit(main(sys.argv[1:]))

if __name__ == '__main__':
    run()
