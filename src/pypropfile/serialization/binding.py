# -*- encoding: utf-8 -*-
# @File   : binding.py
# @Time   : 2026/10/19 10:41:15
# @Author : Kariko Lin

"""How a dataclass field maps to a property.

```python
@dataclass
class Settings:
    port: int = prop('server.port', default=8080)
    debug: bool = False                     # property "debug"
    color: Color = prop(converter=HexColor(), default=Color.RED)
    cache: dict = prop(ignore=True, default_factory=dict)
```
"""

from dataclasses import dataclass, field
from typing import Any

from ..exceptions import InvalidPropertyError
from ..props.grammar import unwritable_name
from .converter import PropertyConverter

METADATA_KEY = 'pypropfile'


@dataclass(frozen=True)
class FieldBinding:
    """Per-field settings: external `name`, `converter`, `ignore` flag.

    `name=None` means "use the field's own name".
    """
    name: str | None = None
    converter: PropertyConverter | None = None
    ignore: bool = False

    def __post_init__(self) -> None:
        if self.name is not None:
            if not isinstance(self.name, str):
                raise InvalidPropertyError(
                    f'Property names must be str: {self.name!r}')
            if reason := unwritable_name(self.name):
                raise InvalidPropertyError(f'{reason}: {self.name!r}')
        if self.converter is not None \
                and not isinstance(self.converter, PropertyConverter):
            raise InvalidPropertyError(
                f'{self.converter!r} is not a PropertyConverter instance.')


def prop(
    name: str | None = None, *,
    converter: PropertyConverter | None = None,
    ignore: bool = False,
    **kwargs: Any
) -> Any:
    """`dataclasses.field()` carrying a `FieldBinding`.

    Other keywords (`default`, `default_factory`, ...) go to `field()`.
    """
    binding = FieldBinding(name, converter, ignore)
    metadata = dict(kwargs.pop('metadata', None) or {})
    metadata[METADATA_KEY] = binding
    return field(metadata=metadata, **kwargs)
