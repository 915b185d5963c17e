"""
Tests for the flat property store: container operations, strict and
best-effort loading, saving and round-trips.
"""

import io

import pytest

from pypropfile import (
    FormatError, GroupSyntaxError, InvalidPropertyError, PropertyFile
)
from pypropfile.props import rw

SIMPLE = '''\
# a simple property file
message = Hello, World!

space ~    Four spaces
nospace = No spaces
empty =
'''


def load_text(text: str, **kwargs) -> PropertyFile:
    return PropertyFile(io.BytesIO(text.encode('utf-8')), **kwargs)


def save_text(props: PropertyFile) -> str:
    buf = io.BytesIO()
    props.save(buf)
    return buf.getvalue().decode('utf-8')


def test_load_simple():
    props = load_text(SIMPLE)
    assert props['message'] == 'Hello, World!'
    assert props['space'] == '    Four spaces'
    assert props['nospace'] == 'No spaces'
    assert props['empty'] == ''
    assert list(props) == ['message', 'space', 'nospace', 'empty']


def test_load_from_path(tmp_path):
    path = tmp_path / 'simple.property'
    path.write_text(SIMPLE, encoding='utf-8')
    props = PropertyFile(path)
    assert props.get_property('message') == 'Hello, World!'
    props = PropertyFile(str(path), encoding=None)
    assert props.get_property('message') == 'Hello, World!'


def test_load_text_stream():
    props = PropertyFile(io.StringIO('a = 1\nb ~ 2\n'))
    assert dict(props) == {'a': '1', 'b': ' 2'}


def test_load_other_encoding(tmp_path):
    path = tmp_path / 'latin.property'
    path.write_bytes('name = Café\n'.encode('latin-1'))
    assert PropertyFile(path, 'latin-1')['name'] == 'Café'


def test_utf8_bom_is_dropped(tmp_path):
    raw = b'\xef\xbb\xbfmessage = Hello\n'
    path = tmp_path / 'bom.property'
    path.write_bytes(raw)
    for source in (path, io.BytesIO(raw)):
        props = PropertyFile(source)
        assert list(props) == ['message']
        assert props.get_property('message') == 'Hello'
    props = PropertyFile(path, encoding=None)
    assert props.get_property('message') == 'Hello'


def test_wrong_encoding_guess_falls_back(monkeypatch):
    raw = 'name = Café\n'.encode('utf-8')
    monkeypatch.setattr(
        rw, 'guess_codec',
        lambda _: {'encoding': 'ascii', 'confidence': 0.99})
    assert PropertyFile(io.BytesIO(raw), None)['name'] == 'Café'
    raw = 'name = Café\n'.encode('latin-1')
    assert PropertyFile(io.BytesIO(raw), None)['name'] == 'Café'


def test_stream_is_left_open():
    buf = io.BytesIO(b'a = 1\n')
    PropertyFile(buf)
    assert not buf.closed
    out = io.BytesIO()
    PropertyFile(io.BytesIO(b'a = 1\n')).save(out)
    assert not out.closed
    assert out.getvalue() == b'a = 1\n'


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        PropertyFile(tmp_path / 'nowhere.property')


def test_strict_load_raises_on_malformed_line():
    with pytest.raises(FormatError) as info:
        load_text('a = 1\nthis line has no operator\nb = 2\n')
    assert info.value.line == 'this line has no operator'
    assert info.value.lineno == 2


def test_strict_load_rejects_group_headers():
    with pytest.raises(FormatError):
        load_text('[Group 1]\none = 1\n')


def test_unclosed_group_header_is_fatal():
    props = PropertyFile()
    with pytest.raises(GroupSyntaxError) as info:
        props.try_load(io.BytesIO(b'a = 1\n[Group 1\nb = 2\n'))
    assert info.value.lineno == 2
    assert not issubclass(GroupSyntaxError, FormatError)


def test_try_load_keeps_valid_lines():
    props = PropertyFile()
    ok = props.try_load(io.BytesIO(
        b'a = 1\nthis line has no operator\nb = 2\n[group]\nc ~3\n'))
    assert not ok
    assert dict(props) == {'a': '1', 'b': '2', 'c': '3'}


def test_try_load_success():
    props = PropertyFile()
    assert props.try_load(io.BytesIO(SIMPLE.encode()))
    assert len(props) == 4


def test_try_load_propagates_io_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        PropertyFile().try_load(tmp_path / 'nowhere.property')


def test_load_without_clear_merges():
    props = load_text('a = 1\nb = 2\n')
    props.load(io.BytesIO(b'b = 20\nc = 30\n'), clear=False)
    assert dict(props) == {'a': '1', 'b': '20', 'c': '30'}
    props.load(io.BytesIO(b'z = 0\n'))
    assert dict(props) == {'z': '0'}


def test_treat_empty_as_null():
    props = load_text('p =\nq ~\nr = x\n', treat_empty_as_null=True)
    assert props['p'] is None
    assert props['q'] is None
    assert props['r'] == 'x'
    assert 'p' in props


def test_container_operations():
    props = PropertyFile()
    assert props.set_property('a', '1')
    props['b'] = '2'
    props['a'] = 'one'
    assert props.count == 2
    assert props.contains('a') and 'b' in props
    assert props.get_property('missing') is None
    with pytest.raises(KeyError):
        props['missing']
    assert props.remove('a')
    assert not props.remove('a')
    arr = [('x', 'y')]
    props.copy_to(arr, 1)
    assert arr == [('x', 'y'), ('b', '2')]
    props.clear()
    assert len(props) == 0


def test_empty_name_is_rejected():
    props = PropertyFile()
    assert not props.set_property('', 'x')
    assert not props.set_property(None, 'x')
    with pytest.raises(InvalidPropertyError):
        props[''] = 'x'
    with pytest.raises(TypeError):
        props['n'] = 1


def test_typed_getters():
    props = load_text('int = 100\nfloat = 0.1\nyes = true\nno = 0\n')
    assert props.getint('int') == 100
    assert props.getfloat('float') == 0.1
    assert props.getbool('yes') is True
    assert props.getbool('no') is False
    assert props.get('int', int) == 100
    assert props.get('missing', int, 7) == 7
    assert props.get('yes', bool) is True


def test_save_operators():
    props = PropertyFile()
    props['nospace'] = 'No spaces'
    props['space'] = '    Four spaces'
    props['empty'] = ''
    assert save_text(props) == (
        'nospace = No spaces\n'
        'space ~    Four spaces\n'
        'empty ~\n')


def test_round_trip(tmp_path):
    props = PropertyFile()
    props['property.first'] = 'First Property'
    props['space'] = '    Four spaces'
    props['tab'] = '\tindented'
    props['empty'] = ''
    path = tmp_path / 'save.property'
    props.save(path)
    again = PropertyFile(path)
    assert again == props
    # idempotent
    again.save(path)
    assert PropertyFile(path) == props


def test_save_back_to_loaded_path(tmp_path):
    path = tmp_path / 'back.property'
    path.write_text('a = 1\n', encoding='utf-8')
    props = PropertyFile(path)
    props['b'] = '2'
    props.save()
    assert path.read_text(encoding='utf-8') == 'a = 1\nb = 2\n'


def test_save_without_target():
    with pytest.raises(ValueError):
        PropertyFile().save()


def test_null_round_trip(tmp_path):
    path = tmp_path / 'null.property'
    props = PropertyFile()
    props['p'] = None
    with pytest.warns(UserWarning):
        props.save(path)
    assert PropertyFile(path, treat_empty_as_null=True)['p'] is None
    assert PropertyFile(path)['p'] == ''


def test_try_save_reports_failure(tmp_path):
    props = PropertyFile()
    props['ok'] = 'fine'
    assert props.try_save(tmp_path / 'ok.property')
    props['broken'] = 'two\nlines'
    assert not props.try_save(tmp_path / 'broken.property')
    assert not props.try_save(tmp_path / 'missing-dir' / 'x.property')
