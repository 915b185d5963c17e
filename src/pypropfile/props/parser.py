# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/19 12:10:44
# @Author : Kariko Lin

"""File handlers, one per format, so converting is just

```python
PropertyYamlParser('app.yaml', grouped=True).write(
    PropertyGroupParser('app.property').read())
```

JSON and YAML documents are a single object: global properties are
`name: value` pairs, groups are nested objects.
"""

import json
from abc import abstractmethod
from typing import Any, TextIO

import yaml

from ..abstract import FileHandler
from ..exceptions import FormatError
from .model import PropertyFile, PropertyGroupFile, PropertyMap
from .rw import DEFAULT_ENCODING, open_sink, open_source

Document = PropertyFile | PropertyGroupFile


class PropertyFileParser(FileHandler[PropertyFile]):
    def __init__(
        self, filename: str, encoding: str | None = DEFAULT_ENCODING, *,
        treat_empty_as_null: bool = False
    ) -> None:
        super().__init__(filename, encoding)
        self._null = treat_empty_as_null

    def read(self) -> PropertyFile:
        return PropertyFile(
            self._fn, self._codec, treat_empty_as_null=self._null)

    def write(self, instance: PropertyFile) -> None:
        instance.save(self._fn, self._codec)


class PropertyGroupParser(FileHandler[PropertyGroupFile]):
    def __init__(
        self, filename: str, encoding: str | None = DEFAULT_ENCODING, *,
        treat_empty_as_null: bool = False,
        blank_lines: int = 1
    ) -> None:
        super().__init__(filename, encoding)
        self._null = treat_empty_as_null
        self._blank_lines = blank_lines

    def read(self) -> PropertyGroupFile:
        return PropertyGroupFile(
            self._fn, self._codec,
            treat_empty_as_null=self._null, blank_lines=self._blank_lines)

    def write(self, instance: PropertyGroupFile) -> None:
        blank_lines, instance.blank_lines = \
            instance.blank_lines, self._blank_lines
        try:
            instance.save(self._fn, self._codec)
        finally:
            instance.blank_lines = blank_lines


def _to_value(key: str, v: Any) -> str | None:
    if v is None or isinstance(v, str):
        return v
    if isinstance(v, bool):
        return 'true' if v else 'false'
    if isinstance(v, (int, float)):
        return str(v)
    raise FormatError(f'{key}: {v!r}', reason='Not a property value')


class _MappingParser(FileHandler[Document]):
    def __init__(
        self, filename: str, encoding: str | None = DEFAULT_ENCODING, *,
        grouped: bool = False
    ) -> None:
        """`grouped` picks `PropertyGroupFile` over `PropertyFile`."""
        super().__init__(filename, encoding)
        self._grouped = grouped

    @abstractmethod
    def _load(self, fp: TextIO) -> Any:
        raise NotImplementedError

    @abstractmethod
    def _dump(self, data: dict[str, Any], fp: TextIO) -> None:
        raise NotImplementedError

    def read(self) -> Document:
        with open_source(self._fn, self._codec) as fp:
            src = self._load(fp)
        if src is None:
            src = {}
        if not isinstance(src, dict):
            raise FormatError(
                str(self._fn), reason='Expected an object at top level')

        ret = PropertyGroupFile() if self._grouped else PropertyFile()
        for k, v in src.items():
            k = str(k)
            if not isinstance(v, dict):
                target = ret.globals if self._grouped else ret
                target[k] = _to_value(k, v)
            elif self._grouped:
                ret[k] = {str(i): _to_value(str(i), j) for i, j in v.items()}
            else:
                raise FormatError(
                    k, reason='Groups are not supported in a flat document')
        return ret

    @staticmethod
    def _as_dict(instance: Document) -> dict[str, Any]:
        if isinstance(instance, PropertyMap):
            return dict(instance)
        ret: dict[str, Any] = dict(instance.globals)
        for k, grp in instance.items():
            if k in ret:
                raise FormatError(
                    k, reason='Group name clashes with a global property')
            ret[k] = dict(grp)
        return ret

    def write(self, instance: Document) -> None:
        data = self._as_dict(instance)
        with open_sink(self._fn, self._codec) as fp:
            self._dump(data, fp)


class PropertyJsonParser(_MappingParser):
    def __init__(
        self, filename: str, encoding: str | None = DEFAULT_ENCODING, *,
        grouped: bool = False, indent: int = 2
    ) -> None:
        super().__init__(filename, encoding, grouped=grouped)
        self._indent = indent

    def _load(self, fp: TextIO) -> Any:
        return json.load(fp)

    def _dump(self, data: dict[str, Any], fp: TextIO) -> None:
        json.dump(data, fp, ensure_ascii=False, indent=self._indent)
        fp.write('\n')


class PropertyYamlParser(_MappingParser):
    def _load(self, fp: TextIO) -> Any:
        return yaml.safe_load(fp)

    def _dump(self, data: dict[str, Any], fp: TextIO) -> None:
        yaml.safe_dump(
            data, fp, allow_unicode=True, sort_keys=False,
            default_flow_style=False)
