# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/19 12:33:17
# @Author : Kariko Lin

"""`.property` files: `name = value`, `name ~  value`, `[group]`.

```python
from pypropfile import PropertyFile

props = PropertyFile('simple.property')
props['message']  # 'Hello, World!'
```
"""

from .exceptions import (
    PropertyError,
    FormatError,
    GroupSyntaxError,
    InvalidPropertyError,
    ConversionError,
    MissingPropertyError
)
from .props import (
    LineKind, parse_line,
    PropertyFile, PropertyGroup, PropertyGroupFile, TypedPropertyFile,
    PropertyFileParser, PropertyGroupParser,
    PropertyJsonParser, PropertyYamlParser
)
from .serialization import (
    PropertyConverter, FieldBinding, prop,
    PropertySerializer, MappingResult, serialize_to, deserialize_from
)

__all__ = [
    'PropertyError', 'FormatError', 'GroupSyntaxError',
    'InvalidPropertyError', 'ConversionError', 'MissingPropertyError',
    'LineKind', 'parse_line',
    'PropertyFile', 'PropertyGroup', 'PropertyGroupFile', 'TypedPropertyFile',
    'PropertyFileParser', 'PropertyGroupParser',
    'PropertyJsonParser', 'PropertyYamlParser',
    'PropertyConverter', 'FieldBinding', 'prop',
    'PropertySerializer', 'MappingResult', 'serialize_to', 'deserialize_from'
]
