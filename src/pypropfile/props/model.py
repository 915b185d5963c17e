# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/19 09:48:20
# @Author : Kariko Lin

"""Property stores, flat and grouped.

```
message = Hello, World!

[Group 1]
one = 1
[]
two ~  2
```

`message` and `two` both live in `PropertyGroupFile.globals`.

All values *should* be `str | None`: `None` only shows up when loading
with `treat_empty_as_null=True`, or when set by hand.
"""

import logging
import warnings
from abc import ABCMeta, abstractmethod
from collections.abc import MutableMapping
from typing import Callable, Iterable, Iterator, Mapping, TextIO, TypeVar

from ..exceptions import (
    FormatError, GroupSyntaxError, InvalidPropertyError
)
from .grammar import Line, LineKind, format_entry, format_group, parse_line
from .rw import DEFAULT_ENCODING, Source, is_path, open_sink, open_source

__all__ = [
    'PropertyMap', 'PropertyFile', 'PropertyGroup', 'PropertyGroupFile'
]

logger = logging.getLogger(__name__)

R = TypeVar('R')


def _check_name(name: object) -> str:
    if not isinstance(name, str) or not name:
        raise InvalidPropertyError(
            f'Property names cannot be null or empty: {name!r}')
    return name


class PropertyMap(MutableMapping[str, str | None]):
    """An ordered `name: value` dict, last write wins."""
    def __init__(
        self, pairs_to_import: Mapping[str, str | None] | None = None
    ) -> None:
        self.__raw: dict[str, str | None] = {}
        if pairs_to_import:
            self.update(pairs_to_import)

    def __getitem__(self, key: str) -> str | None:
        return self.__raw[key]

    def __setitem__(self, key: str, value: str | None) -> None:
        if value is not None and not isinstance(value, str):
            raise TypeError(
                f'Property "{key}" expects str or None, '
                f'got {type(value).__name__}')
        self.__raw[_check_name(key)] = value

    def __delitem__(self, key: str) -> None:
        del self.__raw[key]

    def __contains__(self, key: object) -> bool:
        return key in self.__raw

    def __len__(self) -> int:
        return len(self.__raw)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.__raw!r})'

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PropertyMap):
            return self.__raw == other.__raw
        return super().__eq__(other)

    @property
    def count(self) -> int:
        return len(self.__raw)

    def get_property(self, name: str) -> str | None:
        """The value of `name`, or `None` if there's no such property."""
        return self.__raw.get(name)

    def set_property(self, name: str, value: str | None) -> bool:
        """Like `self[name] = value`, but `False` for an empty name."""
        try:
            self[name] = value
        except InvalidPropertyError:
            return False
        return True

    def contains(self, name: str) -> bool:
        return name in self.__raw

    def remove(self, name: str) -> bool:
        return self.__raw.pop(name, _MISSING) is not _MISSING

    def clear(self) -> None:
        self.__raw.clear()

    def copy_to(
        self, array: list[tuple[str, str | None]], index: int = 0
    ) -> None:
        """Copy `(name, value)` pairs into `array`, starting at `index`.

        `array` grows if it's too short.
        """
        if index < 0 or index > len(array):
            raise IndexError(index)
        array[index:index + len(self.__raw)] = self.__raw.items()

    def get(
        self, key: str,
        converter: Callable[[str], R] = str,
        default: R | None = None
    ) -> R | None:
        if converter is bool:
            return self.getbool(key, default)
        if key not in self or self[key] is None:
            return default
        return converter(self[key])

    def getint(self, key: str, default: int | None = None) -> int | None:
        return self.get(key, int, default)

    def getfloat(
        self, key: str, default: float | None = None
    ) -> float | None:
        return self.get(key, float, default)

    def getbool(self, key: str, default: bool | None = None) -> bool | None:
        value = self.get_property(key)
        if not value:
            return default
        return value.strip()[:1].lower() in ('1', 'y', 't')

    def _read_entry(self, line: Line, treat_empty_as_null: bool) -> None:
        value = line.value
        if treat_empty_as_null and not value:
            value = None
        self[line.name] = value

    def _format_entries(self) -> Iterator[str]:
        for k, v in self.__raw.items():
            yield format_entry(k, v)


_MISSING = object()


def _report(err: FormatError, strict: bool) -> None:
    if strict:
        raise err
    logger.warning('Skipped: %s', err)


class PropertyDocument(metaclass=ABCMeta):
    """`load`/`save` over `_readlines` and `_writelines`.

    Paths are opened (and closed) here; streams are only read or written.
    """
    _source: Source | None = None

    @abstractmethod
    def _reset(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def _readlines(
        self, buf: Iterable[str], strict: bool, treat_empty_as_null: bool
    ) -> bool:
        raise NotImplementedError

    @abstractmethod
    def _writelines(self, fp: TextIO) -> None:
        raise NotImplementedError

    @abstractmethod
    def _null_names(self) -> list[str]:
        raise NotImplementedError

    def _load(
        self, source: Source, encoding: str | None,
        clear: bool, treat_empty_as_null: bool, strict: bool
    ) -> bool:
        with open_source(source, encoding) as buf:
            if clear:
                self._reset()
            ok = self._readlines(buf, strict, treat_empty_as_null)
        if is_path(source):
            self._source = source
        return ok

    def load(
        self, source: Source, encoding: str | None = DEFAULT_ENCODING,
        clear: bool = True, treat_empty_as_null: bool = False
    ) -> None:
        """Read properties from a path or stream.

        Args:
            encoding: `None` to guess it with `chardet`.
            clear: drop existing properties first, otherwise merge
                (same names get overwritten).
            treat_empty_as_null: store empty values as `None`.

        Raises:
            FormatError: at the first line with neither `=` nor `~`.
            OSError: if the file can't be opened or read.
        """
        self._load(source, encoding, clear, treat_empty_as_null, True)

    def try_load(
        self, source: Source, encoding: str | None = DEFAULT_ENCODING,
        clear: bool = True, treat_empty_as_null: bool = False
    ) -> bool:
        """Best-effort `load()`: malformed lines are skipped.

        Returns `False` if any line got skipped. Properties from valid
        lines are kept either way.
        """
        return self._load(source, encoding, clear, treat_empty_as_null, False)

    def save(
        self, sink: Source | None = None,
        encoding: str | None = DEFAULT_ENCODING
    ) -> None:
        """Write properties to a path or stream.

        Without `sink`, write back to the path last loaded from.
        Nothing is atomic: a failure leaves a partially written file.
        """
        if sink is None:
            if self._source is None:
                raise ValueError('No file to save to.')
            sink = self._source
        if names := self._null_names():
            warnings.warn(
                f'{names} are None and will be saved as empty values, '
                'reload with `treat_empty_as_null=True` to keep them None.',
                stacklevel=2)
        with open_sink(sink, encoding) as fp:
            self._writelines(fp)

    def try_save(
        self, sink: Source | None = None,
        encoding: str | None = DEFAULT_ENCODING
    ) -> bool:
        """`save()`, but `False` on any failure instead of raising."""
        try:
            self.save(sink, encoding)
        except Exception as e:
            logger.warning('Failed to save properties: %s', e)
            return False
        return True


class PropertyFile(PropertyMap, PropertyDocument):
    """A flat property file. Group headers are format errors here."""
    def __init__(
        self, source: Source | None = None,
        encoding: str | None = DEFAULT_ENCODING, *,
        treat_empty_as_null: bool = False
    ) -> None:
        """Empty, or loaded (strictly) from `source` if given."""
        super().__init__()
        if source is not None:
            self.load(
                source, encoding, treat_empty_as_null=treat_empty_as_null)

    def _reset(self) -> None:
        self.clear()

    def _readlines(
        self, buf: Iterable[str], strict: bool, treat_empty_as_null: bool
    ) -> bool:
        ok = True
        for lineno, i in enumerate(buf, 1):
            line = parse_line(i)
            if line.kind == LineKind.ENTRY:
                self._read_entry(line, treat_empty_as_null)
            elif line.kind in (LineKind.BLANK, LineKind.COMMENT):
                continue
            elif line.kind == LineKind.MALFORMED_GROUP:
                # never best-effort, as in grouped files.
                raise GroupSyntaxError(line.raw, lineno)
            else:
                reason = (
                    'Groups are not supported in a flat property file'
                    if line.kind == LineKind.GROUP else None)
                _report(FormatError(line.raw, lineno, reason), strict)
                ok = False
        return ok

    def _writelines(self, fp: TextIO) -> None:
        for i in self._format_entries():
            fp.write(i + '\n')

    def _null_names(self) -> list[str]:
        return [k for k, v in self.items() if v is None]


class PropertyGroup(PropertyMap):
    """Properties under one `[name]` header."""
    def __init__(
        self, name: str,
        pairs_to_import: Mapping[str, str | None] | None = None
    ) -> None:
        self._name = name
        super().__init__(pairs_to_import)

    @property
    def name(self) -> str:
        return self._name

    def __str__(self) -> str:
        return format_group(self._name) if self._name else '[<global>]'


class PropertyGroupFile(
    MutableMapping[str, PropertyGroup], PropertyDocument
):
    """A property file with `[group]` headers.

    Properties before the first header (or after an empty `[]`) go to
    `self.globals`. Group names are unique; meeting a header twice just
    continues the existing group.
    """
    def __init__(
        self, source: Source | None = None,
        encoding: str | None = DEFAULT_ENCODING, *,
        treat_empty_as_null: bool = False,
        blank_lines: int = 1
    ) -> None:
        self.__globals = PropertyGroup('')
        self.__groups: dict[str, PropertyGroup] = {}
        self.blank_lines = blank_lines
        if source is not None:
            self.load(
                source, encoding, treat_empty_as_null=treat_empty_as_null)

    @property
    def globals(self) -> PropertyGroup:
        """Properties not belonging to any group."""
        return self.__globals

    def __getitem__(self, key: str) -> PropertyGroup:
        return self.__groups[key]

    def __setitem__(
        self, key: str, value: Mapping[str, str | None]
    ) -> None:
        # shouldn't keep a ref to the external dict.
        self.__groups[_check_name(key)] = PropertyGroup(key, value)

    def __delitem__(self, key: str) -> None:
        del self.__groups[key]

    def __contains__(self, key: object) -> bool:
        return key in self.__groups

    def __len__(self) -> int:
        return len(self.__groups)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__groups)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PropertyGroupFile):
            return self.__globals == other.__globals \
                and self.__groups == other.__groups
        return NotImplemented

    def __repr__(self) -> str:
        return '%s { .globals = %d, .groups = %r }' % (
            type(self).__name__, len(self.__globals), list(self.__groups))

    def group(self, name: str) -> PropertyGroup:
        """Get a group, adding an empty one if `name` is not found.

        An empty `name` means the global scope.
        """
        if not name:
            return self.__globals
        if name not in self.__groups:
            self[name] = {}
        return self.__groups[name]

    def get_property(self, name: str, group: str = '') -> str | None:
        if group and group not in self.__groups:
            return None
        return (self.__groups[group] if group else self.__globals) \
            .get_property(name)

    def set_property(
        self, name: str, value: str | None, group: str = ''
    ) -> bool:
        if not name:
            return False
        return self.group(group).set_property(name, value)

    def clear(self) -> None:
        self.__globals.clear()
        self.__groups.clear()

    def rename(self, old: str, new: str) -> bool:
        """Rename a group, keeping its position.

        Returns `False` if `old` is not found or `new` already exists.
        """
        if old not in self.__groups or new in self.__groups or not new:
            return False
        self.__groups = {
            k: v if k != old else PropertyGroup(new, v)
            for k, v in self.__groups.items()
        }
        return True

    def update(
        self, another: 'PropertyGroupFile | Mapping[str, PropertyGroup]' = (),
        /, **kwargs: Mapping[str, str | None]
    ) -> None:
        """Merge groups of `another` into self (property by property)."""
        if isinstance(another, PropertyGroupFile):
            self.__globals.update(another.globals)
        if isinstance(another, Mapping):
            another = another.items()
        for k, v in [*another, *kwargs.items()]:
            self.group(k).update(v)

    def _reset(self) -> None:
        self.clear()

    def _readlines(
        self, buf: Iterable[str], strict: bool, treat_empty_as_null: bool
    ) -> bool:
        ok, this_group = True, self.__globals
        for lineno, i in enumerate(buf, 1):
            line = parse_line(i)
            match line.kind:
                case LineKind.ENTRY:
                    this_group._read_entry(line, treat_empty_as_null)
                case LineKind.GROUP:
                    this_group = self.group(line.name)
                case LineKind.MALFORMED_GROUP:
                    # never best-effort.
                    raise GroupSyntaxError(line.raw, lineno)
                case LineKind.MALFORMED:
                    _report(FormatError(line.raw, lineno), strict)
                    ok = False
        return ok

    def _writelines(self, fp: TextIO) -> None:
        written = False
        for i in self.__globals._format_entries():
            fp.write(i + '\n')
            written = True
        for grp in self.__groups.values():
            if written:
                fp.write('\n' * self.blank_lines)
            fp.write(format_group(grp.name) + '\n')
            for i in grp._format_entries():
                fp.write(i + '\n')
            written = True

    def _null_names(self) -> list[str]:
        ret = [k for k, v in self.__globals.items() if v is None]
        for grp in self.__groups.values():
            ret.extend(f'{grp.name}.{k}' for k, v in grp.items() if v is None)
        return ret
