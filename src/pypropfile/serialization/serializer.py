# -*- encoding: utf-8 -*-
# @File   : serializer.py
# @Time   : 2026/10/19 11:02:57
# @Author : Kariko Lin

"""Dataclass instances <-> `PropertyFile`.

The binding table is built once per serializer from the dataclass fields
(plus explicit `bindings`), so nothing gets looked up per call.
"""

import dataclasses
from dataclasses import dataclass, field, fields, is_dataclass
from functools import lru_cache
from typing import Any, Generic, Mapping, NamedTuple, TypeVar, get_type_hints

from ..exceptions import (
    ConversionError, InvalidPropertyError, MissingPropertyError
)
from ..props.model import PropertyFile
from ..props.rw import DEFAULT_ENCODING, Source
from .binding import METADATA_KEY, FieldBinding
from .converter import PropertyConverter, builtin_converter

T = TypeVar('T')


class BoundField(NamedTuple):
    attr: str
    name: str
    converter: PropertyConverter
    init: bool
    required: bool  # no default, no default_factory


@dataclass
class MappingResult(Generic[T]):
    value: T
    # attribute names whose property was not found.
    missing: list[str] = field(default_factory=list)


class PropertySerializer(Generic[T]):
    def __init__(
        self, record_type: type[T],
        bindings: Mapping[str, FieldBinding] | None = None
    ) -> None:
        """
        Args:
            record_type: a dataclass.
            bindings: attribute name -> `FieldBinding`, overriding
                whatever `prop()` declared on that field.

        Raises:
            InvalidPropertyError: unknown attribute in `bindings`,
                duplicated property names, or a field type without
                converter.
        """
        if not (isinstance(record_type, type) and is_dataclass(record_type)):
            raise TypeError(f'{record_type!r} is not a dataclass.')
        self._type = record_type
        self._frozen = record_type.__dataclass_params__.frozen
        bindings = dict(bindings or {})
        hints = get_type_hints(record_type)

        self._fields: list[BoundField] = []
        seen: dict[str, str] = {}
        for f in fields(record_type):
            binding = bindings.pop(f.name, f.metadata.get(METADATA_KEY))
            # private attributes only when explicitly bound.
            if binding is None and f.name.startswith('_'):
                continue
            binding = binding or FieldBinding()
            if binding.ignore:
                continue
            name = binding.name or f.name
            if name in seen:
                raise InvalidPropertyError(
                    f'"{f.name}" and "{seen[name]}" '
                    f'are both bound to property "{name}".')
            seen[name] = f.name
            converter = binding.converter
            if converter is None:
                try:
                    converter = builtin_converter(hints.get(f.name, Any))
                except TypeError as e:
                    raise InvalidPropertyError(
                        f'Field "{f.name}" needs a converter: {e}') from e
            self._fields.append(BoundField(
                f.name, name, converter, f.init,
                f.default is dataclasses.MISSING
                and f.default_factory is dataclasses.MISSING))
        if bindings:
            raise InvalidPropertyError(
                f'{record_type.__name__} has no fields {list(bindings)}.')

    @property
    def fields(self) -> tuple[BoundField, ...]:
        return tuple(self._fields)

    def serialize(self, obj: T) -> PropertyFile:
        """Fields that are `None` are left out."""
        if not isinstance(obj, self._type):
            raise TypeError(
                f'Expected {self._type.__name__}, got {type(obj).__name__}')
        ret = PropertyFile()
        for f in self._fields:
            value = getattr(obj, f.attr)
            if value is None:
                continue
            try:
                text = f.converter.serialize(value)
            except Exception as e:
                raise ConversionError(f.attr, value, str(e)) from e
            if not isinstance(text, str):
                raise ConversionError(
                    f.attr, value,
                    f'converter returned {type(text).__name__}, not str')
            ret[f.name] = text
        return ret

    def _convert(self, f: BoundField, raw: str | None) -> Any:
        if raw is None:
            return None
        try:
            return f.converter.deserialize(raw)
        except Exception as e:
            raise ConversionError(f.attr, raw, str(e)) from e

    def read(
        self, store: Mapping[str, str | None], instance: T | None = None,
        *, strict: bool = False
    ) -> MappingResult[T]:
        """Like `deserialize()`, also telling which properties are missing.

        Missing ones keep their default (or the value in `instance`).
        A missing field that has no default still raises
        `MissingPropertyError` when a new instance has to be built.
        Whatever raises, `instance` is left untouched.
        """
        found: dict[str, Any] = {}
        missing: list[str] = []
        for f in self._fields:
            if f.name in store:
                found[f.attr] = self._convert(f, store[f.name])
            else:
                missing.append(f.attr)
        if strict and missing:
            raise MissingPropertyError(
                f.name for f in self._fields if f.attr in missing)

        if instance is None:
            return MappingResult(self._build(found), missing)
        if self._frozen:
            init_args = {k: v for k, v in found.items() if self._is_init(k)}
            instance = dataclasses.replace(instance, **init_args)
            self._set_attrs(instance, found, only_non_init=True)
        else:
            self._set_attrs(instance, found)
        return MappingResult(instance, missing)

    def _is_init(self, attr: str) -> bool:
        return next(f.init for f in self._fields if f.attr == attr)

    def _set_attrs(
        self, instance: T, values: dict[str, Any], only_non_init: bool = False
    ) -> None:
        for k, v in values.items():
            if only_non_init and self._is_init(k):
                continue
            # frozen dataclasses reject setattr.
            object.__setattr__(instance, k, v)

    def _build(self, found: dict[str, Any]) -> T:
        lacking = [
            f.attr for f in self._fields
            if f.required and f.init and f.attr not in found]
        # ignored or private fields without default can't be filled at all.
        lacking.extend(
            f.name for f in fields(self._type)
            if f.init and f.name not in found
            and f.name not in (i.attr for i in self._fields)
            and f.default is dataclasses.MISSING
            and f.default_factory is dataclasses.MISSING)
        if lacking:
            raise MissingPropertyError(lacking)
        ret = self._type(
            **{k: v for k, v in found.items() if self._is_init(k)})
        self._set_attrs(ret, found, only_non_init=True)
        return ret

    def deserialize(
        self, store: Mapping[str, str | None],
        instance: T | None = None, *, strict: bool = False
    ) -> T:
        """Build a new record from `store`, or update `instance`.

        Raises:
            ConversionError: a value doesn't fit its field.
            MissingPropertyError: with `strict`, if any bound property
                is not in `store`.
        """
        return self.read(store, instance, strict=strict).value

    def dump(
        self, obj: T, sink: Source, encoding: str | None = DEFAULT_ENCODING
    ) -> None:
        self.serialize(obj).save(sink, encoding)

    def load(
        self, source: Source, encoding: str | None = DEFAULT_ENCODING, *,
        treat_empty_as_null: bool = False, strict: bool = False
    ) -> T:
        store = PropertyFile(
            source, encoding, treat_empty_as_null=treat_empty_as_null)
        return self.deserialize(store, strict=strict)


@lru_cache(maxsize=None)
def serializer_for(record_type: type[T]) -> PropertySerializer[T]:
    """Shared serializer of `record_type`, using declared bindings only."""
    return PropertySerializer(record_type)


def serialize_to(
    sink: Source, obj: Any, encoding: str | None = DEFAULT_ENCODING
) -> None:
    serializer_for(type(obj)).dump(obj, sink, encoding)


def deserialize_from(
    source: Source, record_type: type[T] | None = None,
    encoding: str | None = DEFAULT_ENCODING
) -> T | PropertyFile:
    """Without `record_type`, this is just `PropertyFile(source)`."""
    if record_type is None:
        return PropertyFile(source, encoding)
    return serializer_for(record_type).load(source, encoding)
