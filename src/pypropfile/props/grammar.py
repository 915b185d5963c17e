# -*- encoding: utf-8 -*-
# @File   : grammar.py
# @Time   : 2026/10/19 09:10:06
# @Author : Kariko Lin

"""Line grammar of `.property` files.

```
# comment
# value left-trimmed, for alignment:
name = value
# value kept verbatim, leading spaces included:
name ~    value
# group scope (grouped files only), then back to the global scope:
[group name]
[]
```

There are no inline comments, everything after the operator is value.

Checks go in order: comment, group header, `=`, `~`.
So `a = b ~ c` is `a`: `b ~ c`, while `a ~ b = c` is `a ~ b`: `c`.
"""

from enum import Enum
from typing import NamedTuple

from ..exceptions import FormatError

ASSIGN = '='
ASSIGN_VERBATIM = '~'
COMMENT = '#'
GROUP_OPEN, GROUP_CLOSE = '[', ']'


class LineKind(int, Enum):
    BLANK = 0
    COMMENT = 1
    GROUP = 2
    ENTRY = 3
    MALFORMED = 4
    MALFORMED_GROUP = 5  # `[` without `]`


class Line(NamedTuple):
    kind: LineKind
    name: str | None = None
    value: str | None = None
    raw: str = ''

    @property
    def malformed(self) -> bool:
        return self.kind in (LineKind.MALFORMED, LineKind.MALFORMED_GROUP)


def _chomp(line: str) -> str:
    if line.endswith('\n'):
        line = line[:-1]
    if line.endswith('\r'):
        line = line[:-1]
    return line


def parse_line(line: str) -> Line:
    """Classify one line, with or without its line terminator."""
    raw = _chomp(line)
    text = raw.lstrip()
    if not text:
        return Line(LineKind.BLANK, raw=raw)
    if text[0] == COMMENT:
        return Line(LineKind.COMMENT, raw=raw)
    if text[0] == GROUP_OPEN:
        end = text.rfind(GROUP_CLOSE)
        if end < 0:
            return Line(LineKind.MALFORMED_GROUP, raw=raw)
        # empty name -> global scope
        return Line(LineKind.GROUP, name=text[1:end].strip(), raw=raw)

    if (idx := text.find(ASSIGN)) >= 0:
        name, value = text[:idx].rstrip(), text[idx + 1:].lstrip()
    elif (idx := text.find(ASSIGN_VERBATIM)) >= 0:
        name, value = text[:idx].rstrip(), text[idx + 1:]
    else:
        return Line(LineKind.MALFORMED, raw=raw)

    if not name:
        return Line(LineKind.MALFORMED, raw=raw)
    return Line(LineKind.ENTRY, name, value, raw)


def unwritable_name(name: str) -> str | None:
    """Tell why `name` would not read back as itself, or `None`."""
    if not name:
        return 'Empty property name'
    if ASSIGN in name or ASSIGN_VERBATIM in name:
        return 'Property names cannot contain "=" nor "~"'
    if '\n' in name or '\r' in name:
        return 'Line breaks are not representable'
    if name[0] in (COMMENT, GROUP_OPEN) or name != name.strip():
        return 'Property name would be read back differently'
    return None


def needs_verbatim(value: str | None) -> bool:
    """Whether `value` has to be written with `~` to survive a reload."""
    return not value or value[0].isspace()


def format_entry(name: str, value: str | None) -> str:
    """Render one property, without line terminator.

    `None` is written as an empty value; reload it with
    `treat_empty_as_null=True` to get `None` back.
    """
    if (reason := unwritable_name(name)) is not None:
        raise FormatError(name, reason=reason)
    if value is not None and ('\n' in value or '\r' in value):
        raise FormatError(
            f'{name} = {value}', reason='Line breaks are not representable')
    if needs_verbatim(value):
        # `=` is searched first, it would split the value.
        if value and ASSIGN in value:
            raise FormatError(
                f'{name} ~{value}',
                reason='"=" in a value written with "~"')
        return f'{name} {ASSIGN_VERBATIM}{value or ""}'
    return f'{name} {ASSIGN} {value}'


def format_group(name: str) -> str:
    if '\n' in name or '\r' in name:
        raise FormatError(name, reason='Unwritable group name')
    return f'{GROUP_OPEN}{name}{GROUP_CLOSE}'
