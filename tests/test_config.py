import io
import logging

import pytest

from a2h.color import Color
from a2h.config import Config, ConfigError, env_name

def test_defaults():
    o = Config().options()
    assert o.title == 'a2h'
    assert o.gamma == 1.0
    assert o.fg_color == Color.rgb(255, 255, 255)
    assert o.bg_color == Color.rgb(0, 0, 0)
    assert o.font_size == '9pt'
    assert o.auto_flush is False

def test_later_values_win():
    c = Config()
    c['title'] = 'one'
    c['title'] = 'two'
    assert c['title'] == 'two'

def test_missing_key():
    c = Config(defaults=False)
    assert 'title' not in c
    with pytest.raises(KeyError):
        c['title']

def test_add_file():
    c = Config()
    c.add_file(io.StringIO(
        '# page settings\n'
        '\n'
        'title = "build log"\n'
        'font-size = 11pt # bigger\n'
        'gamma = \\\n'
        '  2.2\n'
        ))
    o = c.options()
    assert o.title == 'build log'
    assert o.font_size == '11pt'
    assert o.gamma == 2.2

def test_bad_line_ignored(caplog):
    c = Config()
    with caplog.at_level(logging.WARNING, logger='a2h.config'):
        c.add_file(io.StringIO('title is broken\n'))
    assert c['title'] == 'a2h'
    assert 'ignoring bad config file line 1' in caplog.text

def test_add_path(tmp_path):
    p = tmp_path / 'a2hrc'
    p.write_text('bg-color = "#101010"\n')
    c = Config()
    c.add_path(str(p))
    assert c.options().bg_color == Color.rgb(16, 16, 16)

def test_default_path(tmp_path, monkeypatch):
    monkeypatch.setenv('HOME', str(tmp_path))
    (tmp_path / '.a2hrc').write_text('title = home\n')
    c = Config()
    c.add_default_path({})
    assert c['title'] == 'home'

def test_default_path_from_environment(tmp_path):
    p = tmp_path / 'other'
    p.write_text('title = other\n')
    c = Config()
    c.add_default_path({'A2H_CONFIG': str(p)})
    assert c['title'] == 'other'

def test_environment():
    assert env_name('fg-color') == 'A2H_FG_COLOR'
    c = Config()
    c.add_environ({'A2H_TITLE': 'env', 'A2H_AUTO_FLUSH': '1',
                   'UNRELATED': 'x'})
    o = c.options()
    assert o.title == 'env'
    assert o.auto_flush is True

@pytest.mark.parametrize('v, expected', [
    ('true', True), ('False', False), ('1', True), ('0', False)])
def test_auto_flush_values(v, expected):
    c = Config()
    c['auto-flush'] = v
    assert c.options().auto_flush is expected

def test_auto_flush_invalid():
    c = Config()
    c['auto-flush'] = 'maybe'
    with pytest.raises(ConfigError):
        c.options()

@pytest.mark.parametrize('gamma', ['abc', '', '0', '-1', 'nan', 'inf'])
def test_invalid_gamma(gamma):
    c = Config()
    c['gamma'] = gamma
    with pytest.raises(ConfigError) as e:
        c.options()
    assert 'invalid gamma' in str(e.value)

@pytest.mark.parametrize('key', ['fg-color', 'bg-color'])
def test_invalid_color(key):
    c = Config()
    c[key] = 'red'
    with pytest.raises(ConfigError) as e:
        c.options()
    assert str(e.value) == 'invalid color: red'
