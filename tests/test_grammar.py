"""
Tests for the line grammar: classification of single lines and the
operator chosen when writing a property back.
"""

import pytest

from pypropfile import FormatError, LineKind, parse_line
from pypropfile.props import format_entry, format_group


def test_blank_and_comment_lines():
    assert parse_line('').kind == LineKind.BLANK
    assert parse_line('   \t \n').kind == LineKind.BLANK
    assert parse_line('# comment = not a property').kind == LineKind.COMMENT
    assert parse_line('    # indented comment').kind == LineKind.COMMENT


def test_equals_trims_leading_value_whitespace():
    line = parse_line('message = Hello, World!\n')
    assert line.kind == LineKind.ENTRY
    assert line.name == 'message'
    assert line.value == 'Hello, World!'


def test_tilde_keeps_value_verbatim():
    line = parse_line('space ~    Four spaces\r\n')
    assert line.kind == LineKind.ENTRY
    assert line.name == 'space'
    assert line.value == '    Four spaces'


def test_equals_wins_over_tilde():
    line = parse_line('a = b ~ c')
    assert (line.name, line.value) == ('a', 'b ~ c')
    line = parse_line('a ~ b = c')
    assert (line.name, line.value) == ('a ~ b', 'c')


def test_empty_values():
    assert parse_line('empty =').value == ''
    assert parse_line('empty ~').value == ''
    assert parse_line('  indented.name   =   x').name == 'indented.name'


def test_malformed_lines():
    assert parse_line('this line has no operator').kind == LineKind.MALFORMED
    assert parse_line('= no name').kind == LineKind.MALFORMED
    assert parse_line('this line has no operator').malformed


def test_group_headers():
    line = parse_line('[Group 1]')
    assert (line.kind, line.name) == (LineKind.GROUP, 'Group 1')
    assert parse_line('  [  spaced  ]  ').name == 'spaced'
    # last `]` closes the header
    assert parse_line('[a]b]').name == 'a]b'
    # empty header -> global scope
    assert parse_line('[]').name == ''
    assert parse_line('[   ]').name == ''


def test_group_header_without_bracket():
    line = parse_line('[Group 1')
    assert line.kind == LineKind.MALFORMED_GROUP
    assert line.malformed


@pytest.mark.parametrize('value, expected', [
    ('No spaces', 'nospace = No spaces'),
    ('    Four spaces', 'nospace ~    Four spaces'),
    ('\tTab', 'nospace ~\tTab'),
    ('', 'nospace ~'),
    (None, 'nospace ~'),
    ('trailing  ', 'nospace = trailing  '),
])
def test_format_entry_picks_operator(value, expected):
    assert format_entry('nospace', value) == expected


@pytest.mark.parametrize('value', ['x', ' x', '', 'a ~ b', 'x=y', '  '])
def test_format_entry_reads_back(value):
    try:
        text = format_entry('name', value)
    except FormatError:
        # only `=` inside a `~` value is unwritable
        assert value[0].isspace() and '=' in value
        return
    line = parse_line(text)
    assert (line.name, line.value) == ('name', value)


@pytest.mark.parametrize('name', ['', 'a=b', 'a~b', '#x', '[x]', ' x', 'a\nb'])
def test_format_entry_rejects_unreadable_names(name):
    with pytest.raises(FormatError):
        format_entry(name, 'value')


def test_format_entry_rejects_line_breaks():
    with pytest.raises(FormatError):
        format_entry('name', 'two\nlines')


def test_format_entry_rejects_equals_in_verbatim_value():
    with pytest.raises(FormatError):
        format_entry('name', '  a = b')


def test_format_group():
    assert format_group('Group 1') == '[Group 1]'
    assert parse_line(format_group('Group 1')).name == 'Group 1'
