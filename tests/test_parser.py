"""
Tests for the file handlers: property text, JSON and YAML, and converting
between them.
"""

import json

import pytest
import yaml

from pypropfile import (
    FormatError,
    PropertyFile,
    PropertyFileParser,
    PropertyGroupFile,
    PropertyGroupParser,
    PropertyJsonParser,
    PropertyYamlParser,
)


def build_grouped() -> PropertyGroupFile:
    doc = PropertyGroupFile()
    doc.globals['title'] = 'Sample'
    doc.globals['nothing'] = None
    doc['server'] = {'host': 'localhost', 'banner': '  hi'}
    return doc


def test_property_file_parser(tmp_path):
    path = tmp_path / 'a.property'
    path.write_text('a = 1\nb =\n', encoding='utf-8')
    props = PropertyFileParser(str(path), treat_empty_as_null=True).read()
    assert dict(props) == {'a': '1', 'b': None}
    props['c'] = 'x'
    PropertyFileParser(str(path)).write(props)
    assert PropertyFile(path)['c'] == 'x'


def test_group_parser_blank_lines(tmp_path):
    path = tmp_path / 'g.property'
    doc = PropertyGroupFile()
    doc['a'] = {'x': '1'}
    doc['b'] = {'y': '2'}
    PropertyGroupParser(str(path), blank_lines=2).write(doc)
    assert path.read_text(encoding='utf-8') == '[a]\nx = 1\n\n\n[b]\ny = 2\n'
    assert doc.blank_lines == 1
    assert list(PropertyGroupParser(str(path)).read()) == ['a', 'b']


def test_json_round_trip(tmp_path):
    path = tmp_path / 'doc.json'
    PropertyJsonParser(str(path), grouped=True).write(build_grouped())
    raw = json.loads(path.read_text(encoding='utf-8'))
    assert raw == {
        'title': 'Sample',
        'nothing': None,
        'server': {'host': 'localhost', 'banner': '  hi'},
    }
    doc = PropertyJsonParser(str(path), grouped=True).read()
    assert doc.globals['nothing'] is None
    assert doc['server']['banner'] == '  hi'


def test_yaml_round_trip(tmp_path):
    path = tmp_path / 'doc.yaml'
    PropertyYamlParser(str(path), grouped=True).write(build_grouped())
    raw = yaml.safe_load(path.read_text(encoding='utf-8'))
    assert raw['server'] == {'host': 'localhost', 'banner': '  hi'}
    doc = PropertyYamlParser(str(path), grouped=True).read()
    assert list(doc) == ['server']
    assert doc.globals['title'] == 'Sample'


def test_scalars_become_strings(tmp_path):
    path = tmp_path / 'flat.yaml'
    path.write_text('port: 8080\ndebug: true\nratio: 0.5\n', encoding='utf-8')
    props = PropertyYamlParser(str(path)).read()
    assert dict(props) == {'port': '8080', 'debug': 'true', 'ratio': '0.5'}


def test_flat_document_rejects_groups(tmp_path):
    path = tmp_path / 'nested.json'
    path.write_text('{"g": {"a": "1"}}', encoding='utf-8')
    with pytest.raises(FormatError):
        PropertyJsonParser(str(path)).read()
    path.write_text('["not", "an", "object"]', encoding='utf-8')
    with pytest.raises(FormatError):
        PropertyJsonParser(str(path), grouped=True).read()


def test_convert_property_to_yaml(tmp_path):
    src = tmp_path / 'app.property'
    src.write_text('name = app\n[db]\nurl = sqlite://\n', encoding='utf-8')
    dst = tmp_path / 'app.yaml'
    PropertyYamlParser(str(dst), grouped=True).write(
        PropertyGroupParser(str(src)).read())
    assert yaml.safe_load(dst.read_text(encoding='utf-8')) == {
        'name': 'app', 'db': {'url': 'sqlite://'}}


def test_group_name_clash(tmp_path):
    doc = PropertyGroupFile()
    doc.globals['db'] = 'x'
    doc['db'] = {}
    with pytest.raises(FormatError):
        PropertyJsonParser(str(tmp_path / 'x.json'), grouped=True).write(doc)
