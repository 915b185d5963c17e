# -*- encoding: utf-8 -*-
# @File   : typed.py
# @Time   : 2026/10/19 11:40:08
# @Author : Kariko Lin

from collections.abc import MutableMapping
from typing import Iterator, TypeVar

from ..exceptions import ConversionError
from ..serialization.converter import PropertyConverter, builtin_converter
from .model import PropertyFile
from .rw import DEFAULT_ENCODING, Source


T = TypeVar('T')


class TypedPropertyFile(MutableMapping[str, T | None]):
    """A `PropertyFile` whose values all share one type.

    ```python
    ports = TypedPropertyFile(int, 'ports.property')
    ports['http'] += 1
    ports.save()
    ```

    Values are converted on every access, `self.file` keeps the text.
    """
    def __init__(
        self, value_type: type[T],
        source: Source | None = None,
        encoding: str | None = DEFAULT_ENCODING, *,
        converter: PropertyConverter[T] | None = None,
        treat_empty_as_null: bool = False
    ) -> None:
        self._conv = converter or builtin_converter(value_type)
        self.file = PropertyFile(
            source, encoding, treat_empty_as_null=treat_empty_as_null)

    def __getitem__(self, key: str) -> T | None:
        raw = self.file[key]
        if raw is None:
            return None
        try:
            return self._conv.deserialize(raw)
        except Exception as e:
            raise ConversionError(key, raw, str(e)) from e

    def __setitem__(self, key: str, value: T | None) -> None:
        if value is not None:
            try:
                value = self._conv.serialize(value)
            except Exception as e:
                raise ConversionError(key, value, str(e)) from e
        self.file[key] = value

    def __delitem__(self, key: str) -> None:
        del self.file[key]

    def __contains__(self, key: object) -> bool:
        return key in self.file

    def __len__(self) -> int:
        return len(self.file)

    def __iter__(self) -> Iterator[str]:
        return iter(self.file)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({dict(self.items())!r})'

    def load(
        self, source: Source, encoding: str | None = DEFAULT_ENCODING,
        clear: bool = True, treat_empty_as_null: bool = False
    ) -> None:
        self.file.load(source, encoding, clear, treat_empty_as_null)

    def try_load(
        self, source: Source, encoding: str | None = DEFAULT_ENCODING,
        clear: bool = True, treat_empty_as_null: bool = False
    ) -> bool:
        return self.file.try_load(source, encoding, clear, treat_empty_as_null)

    def save(
        self, sink: Source | None = None,
        encoding: str | None = DEFAULT_ENCODING
    ) -> None:
        self.file.save(sink, encoding)

    def try_save(
        self, sink: Source | None = None,
        encoding: str | None = DEFAULT_ENCODING
    ) -> bool:
        return self.file.try_save(sink, encoding)
