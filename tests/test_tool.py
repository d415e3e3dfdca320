import io

import pytest

from a2h import tool

@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv('HOME', str(tmp_path))
    return tmp_path

@pytest.fixture
def log_file(tmp_path):
    p = tmp_path / 'build.log'
    p.write_text('first\n\x1b[31mred\x1b[0m\nlast')
    return p

def run(argv, environ=None):
    out = io.StringIO()
    status = tool.main(argv, environ=environ or {}, out=out)
    return status, out.getvalue()

def test_convert_file(home, log_file):
    status, out = run([str(log_file)])
    assert status == 0
    assert out.startswith('<!DOCTYPE html>')
    assert '<title>a2h</title>' in out
    assert '<div>first</div>\n' in out
    assert '<div><span style="color:#cd0000;">red</span></div>\n' in out
    assert '<div>last</div>\n' in out
    assert out.endswith('<!-- 3 rows -->\n</body>\n</html>\n')

def test_multiple_files(home, tmp_path, log_file):
    other = tmp_path / 'other.log'
    other.write_text('more\n')
    status, out = run([str(log_file), str(other)])
    assert status == 0
    # the last line of the first file has no terminator, so it runs into
    # the first line of the next one
    assert '<div>lastmore</div>\n' in out
    assert '<!-- 3 rows -->' in out

def test_options(home, log_file):
    status, out = run(['-t', 'Build', '-s', '12pt', '-c', '#00ff00',
                       '--bg-color', '#111111', str(log_file)])
    assert status == 0
    assert '<title>Build</title>' in out
    assert 'font-size:12pt;' in out
    assert 'color:#00ff00;' in out
    assert 'background-color:#111111;' in out

def test_gamma_option(home, tmp_path):
    p = tmp_path / 'grey.log'
    p.write_text('\x1b[38;2;128;128;128mx\n')
    status, out = run(['-g', '2.0', str(p)])
    assert status == 0
    assert '<span style="color:#404040;">x</span>' in out

def test_environment_and_flags(home, log_file):
    status, out = run([str(log_file)], {'A2H_TITLE': 'from env'})
    assert '<title>from env</title>' in out
    status, out = run(['-t', 'flag', str(log_file)],
                      {'A2H_TITLE': 'from env'})
    assert '<title>flag</title>' in out

def test_config_file(home, tmp_path, log_file):
    conf = tmp_path / 'conf'
    conf.write_text('title = "from file"\nfont-size = 7pt\n')
    status, out = run(['--config', str(conf), str(log_file)])
    assert status == 0
    assert '<title>from file</title>' in out
    assert 'font-size:7pt;' in out

def test_home_config_file(home, log_file):
    (home / '.a2hrc').write_text('title = rc\n')
    status, out = run([str(log_file)])
    assert '<title>rc</title>' in out

def test_bad_color(home, log_file, capsys):
    status, out = run(['-c', 'nothex', str(log_file)])
    assert status == 1
    assert out == ''
    assert capsys.readouterr().err == 'a2h: invalid color: nothex\n'

def test_bad_gamma(home, log_file, capsys):
    status, out = run(['-g', 'x', str(log_file)])
    assert status == 1
    assert 'invalid gamma: x' in capsys.readouterr().err

def test_missing_file(home, tmp_path, capsys):
    status, _ = run([str(tmp_path / 'nope.log')])
    assert status == 1
    assert capsys.readouterr().err.startswith('a2h: ')

def test_missing_config_file(home, tmp_path, log_file, capsys):
    status, _ = run(['--config', str(tmp_path / 'nope'), str(log_file)])
    assert status == 1
    assert capsys.readouterr().err.startswith('a2h: ')

def test_undecodable_bytes(home, tmp_path):
    p = tmp_path / 'bin.log'
    p.write_bytes(b'ok \xff\xfe bytes\n')
    status, out = run([str(p)])
    assert status == 0
    assert '<div>ok �� bytes</div>\n' in out

def test_bash_completion(home):
    status, out = run(['--bash-completion'])
    assert status == 0
    assert 'complete -o default -F _a2h a2h' in out
    assert '--gamma' in out
    assert '--bg-color) return 0 ;;' in out

def test_auto_flush(home, log_file):
    class Out(io.StringIO):
        flushes = 0

        def flush(self):
            self.flushes += 1

    out = Out()
    assert tool.main(['-f', str(log_file)], environ={}, out=out) == 0
    # header, three rows and the footer
    assert out.flushes == 5

    out = Out()
    assert tool.main([str(log_file)], environ={}, out=out) == 0
    assert out.flushes == 0

def test_usage_error():
    with pytest.raises(SystemExit):
        tool.main(['--no-such-flag'], environ={})
