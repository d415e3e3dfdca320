"""
config.py -- a2h settings

Settings are 'key = value' lines. Lines added later shadow earlier ones, so
the sources are added in increasing order of precedence: built-in defaults,
the config file, the environment, and finally the command line.
"""

import logging

L = logging.getLogger('a2h.config')

import os
import shlex

from a2h.color import Color, ColorFormatError, check_gamma

DEFAULTS = (
    ('title', 'a2h'),
    ('gamma', '1.0'),
    ('fg-color', '#ffffff'),
    ('bg-color', '#000000'),
    ('font-size', '9pt'),
    ('auto-flush', 'false'),
    )

ENV_PREFIX = 'A2H_'
ENV_CONFIG = 'A2H_CONFIG'
DEFAULT_CONFIG_PATH = '~/.a2hrc'

class ConfigError(ValueError):
    pass

def env_name(key):
    return ENV_PREFIX + key.upper().replace('-', '_')

def to_bool(k, v):
    v = v.strip().lower()
    if v == 'true':
        return True
    if v == 'false':
        return False
    try:
        return bool(int(v))
    except ValueError:
        raise ConfigError('invalid value for {}: {}'.format(k, v))

class Options(object):
    """ Validated settings, ready to build a filter from """

    def __init__(self, title, gamma, fg_color, bg_color, font_size,
                 auto_flush):
        self.title = title
        self.gamma = gamma
        self.fg_color = fg_color
        self.bg_color = bg_color
        self.font_size = font_size
        self.auto_flush = auto_flush

class Config(object):
    def __init__(self, defaults=True):
        self._lines = []
        if defaults:
            for k, v in DEFAULTS:
                self[k] = v

    def add_line(self, ln, line_number='<direct>'):
        s = shlex.split(ln, True)
        if len(s) == 0:
            return
        if len(s) != 3 or s[1] != '=':
            L.warning('ignoring bad config file line %s: %r', line_number, s)
            return
        self[s[0]] = s[2]

    def add_file(self, f):
        extra = ''
        line_number = 0
        for ln in f:
            line_number += 1
            ln = ln.rstrip('\n')
            if ln.endswith('\\'): # continuation escape
                extra += ln[:-1] + '\n'
                continue
            self.add_line(extra + ln, line_number)
            extra = ''
        if extra:
            L.warning('continuation character at end of file')
            self.add_line(extra, line_number)

    def add_path(self, path):
        L.info('reading configuration from %s', path)
        with open(path, 'r') as f:
            self.add_file(f)

    def add_default_path(self, environ=os.environ):
        """ Reads $A2H_CONFIG, or ~/.a2hrc if it exists """
        path = environ.get(ENV_CONFIG)
        if path:
            self.add_path(path)
            return
        path = os.path.expanduser(DEFAULT_CONFIG_PATH)
        if os.path.isfile(path):
            self.add_path(path)

    def add_environ(self, environ=os.environ):
        for k, _ in DEFAULTS:
            v = environ.get(env_name(k))
            if v is not None:
                L.debug('%s from environment', k)
                self[k] = v

    def __getitem__(self, k):
        for lk, lv in self._lines:
            if lk == k:
                return lv
        raise KeyError(k)

    def __setitem__(self, k, v):
        L.debug('{} = {}'.format(k, v))
        self._lines.insert(0, (k, str(v)))

    def __contains__(self, k):
        return any(lk == k for lk, _ in self._lines)

    def options(self):
        """ Validates the settings. Raises ConfigError on bad values. """
        try:
            gamma = check_gamma(float(self['gamma']))
        except ValueError:
            raise ConfigError('invalid gamma: {}'.format(self['gamma']))

        try:
            fg_color = Color.from_hex(self['fg-color'])
            bg_color = Color.from_hex(self['bg-color'])
        except ColorFormatError as e:
            raise ConfigError(str(e))

        return Options(
            title=self['title'],
            gamma=gamma,
            fg_color=fg_color,
            bg_color=bg_color,
            font_size=self['font-size'],
            auto_flush=to_bool('auto-flush', self['auto-flush']),
            )
