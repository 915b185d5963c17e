# -*- encoding: utf-8 -*-
# @File   : converter.py
# @Time   : 2026/10/19 10:20:33
# @Author : Kariko Lin

"""String <-> value converters.

Custom ones subclass `PropertyConverter` and get passed around as
*instances*; built-in ones are picked by the declared type of a field,
see `builtin_converter()`.
"""

from abc import ABCMeta, abstractmethod
from enum import Enum
from types import NoneType, UnionType
from typing import Any, Generic, TypeVar, Union, get_args, get_origin

T = TypeVar('T')


class PropertyConverter(Generic[T], metaclass=ABCMeta):
    """Converts a value into a property value, and back."""
    @abstractmethod
    def serialize(self, value: T) -> str:
        raise NotImplementedError

    @abstractmethod
    def deserialize(self, value: str) -> T:
        raise NotImplementedError


class StrConverter(PropertyConverter[str]):
    def serialize(self, value: str) -> str:
        return str(value)

    def deserialize(self, value: str) -> str:
        return value


class IntConverter(PropertyConverter[int]):
    def serialize(self, value: int) -> str:
        return str(value)

    def deserialize(self, value: str) -> int:
        return int(value.strip())


class FloatConverter(PropertyConverter[float]):
    def serialize(self, value: float) -> str:
        return repr(float(value))

    def deserialize(self, value: str) -> float:
        return float(value.strip())


class BoolConverter(PropertyConverter[bool]):
    TRUE = ('true', 'yes', 'on', '1')
    FALSE = ('false', 'no', 'off', '0')

    def serialize(self, value: bool) -> str:
        return 'true' if value else 'false'

    def deserialize(self, value: str) -> bool:
        if (v := value.strip().lower()) in self.TRUE:
            return True
        if v in self.FALSE:
            return False
        raise ValueError(f'not a boolean: {value!r}')


E = TypeVar('E', bound=Enum)


class EnumConverter(PropertyConverter[E]):
    """Enum members by *name*, e.g. `Color.RED` <-> `RED`."""
    def __init__(self, enum_type: type[E]) -> None:
        self._type = enum_type

    def serialize(self, value: E) -> str:
        return value.name

    def deserialize(self, value: str) -> E:
        try:
            return self._type[value.strip()]
        except KeyError:
            raise ValueError(
                f'{value!r} is not a member of {self._type.__name__}'
            ) from None


_BUILTINS: dict[type, PropertyConverter] = {
    str: StrConverter(),
    int: IntConverter(),
    float: FloatConverter(),
    bool: BoolConverter(),
}


def unwrap_optional(tp: Any) -> Any:
    """`int | None` -> `int`. Other unions are left as is."""
    if get_origin(tp) in (Union, UnionType):
        args = [i for i in get_args(tp) if i is not NoneType]
        if len(args) == 1:
            return args[0]
    return tp


def builtin_converter(tp: Any) -> PropertyConverter:
    """Pick the converter for a declared type.

    Raises:
        TypeError: no built-in converter for `tp`.
    """
    tp = unwrap_optional(tp)
    if tp is Any:
        return _BUILTINS[str]
    if tp in _BUILTINS:
        return _BUILTINS[tp]
    if isinstance(tp, type) and issubclass(tp, Enum):
        return EnumConverter(tp)
    raise TypeError(f'No built-in property converter for {tp!r}')
