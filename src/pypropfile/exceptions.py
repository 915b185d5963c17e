# -*- encoding: utf-8 -*-
# @File   : exceptions.py
# @Time   : 2026/10/19 09:02:41
# @Author : Kariko Lin

"""Errors raised while reading, writing or mapping property files.

I/O failures are NOT wrapped: whatever `open()` or the stream raises
(`FileNotFoundError`, `PermissionError`, ...) reaches the caller as is.
"""

from typing import Iterable


class PropertyError(Exception):
    """Base class of every error raised by this package."""
    pass


class FormatError(PropertyError, ValueError):
    """A line matches neither `=` nor `~`, or cannot be written back."""
    def __init__(
        self, line: str, lineno: int | None = None, reason: str | None = None
    ) -> None:
        self.line = line
        self.lineno = lineno
        if reason is None:
            reason = "Expected either '=' or '~'"
        where = '' if lineno is None else f' (line {lineno})'
        super().__init__(f'{reason}{where}: {line!r}')


class GroupSyntaxError(PropertyError, ValueError):
    """A group header lacks its closing `]`.

    Kept apart from `FormatError` on purpose: best-effort loading skips
    format errors, but never a broken group header.
    """
    def __init__(self, line: str, lineno: int | None = None) -> None:
        self.line = line
        self.lineno = lineno
        where = '' if lineno is None else f' (line {lineno})'
        super().__init__(f"Group header missing ']'{where}: {line!r}")


class InvalidPropertyError(PropertyError, ValueError):
    """A property name is empty, or is declared in an invalid way."""
    pass


class ConversionError(PropertyError, ValueError):
    def __init__(self, field: str, value: object, reason: str = '') -> None:
        self.field = field
        self.value = value
        msg = f'Cannot convert {value!r} for field "{field}"'
        super().__init__(f'{msg}: {reason}' if reason else msg)


class MissingPropertyError(PropertyError, KeyError):
    def __init__(self, names: Iterable[str]) -> None:
        self.names = tuple(names)
        super().__init__(
            'Properties not found: ' + ', '.join(self.names))

    def __str__(self) -> str:
        # KeyError would repr() the message otherwise.
        return self.args[0]
