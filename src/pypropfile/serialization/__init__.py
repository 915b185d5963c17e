# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/19 12:31:40
# @Author : Kariko Lin

from .converter import (
    PropertyConverter,
    StrConverter,
    IntConverter,
    FloatConverter,
    BoolConverter,
    EnumConverter,
    builtin_converter
)
from .binding import FieldBinding, prop
from .serializer import (
    MappingResult,
    PropertySerializer,
    serializer_for,
    serialize_to,
    deserialize_from
)
