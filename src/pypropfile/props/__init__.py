# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/19 12:31:02
# @Author : Kariko Lin

from .grammar import Line, LineKind, format_entry, format_group, parse_line
from .model import PropertyMap, PropertyFile, PropertyGroup, PropertyGroupFile
from .typed import TypedPropertyFile
from .parser import (
    PropertyFileParser,
    PropertyGroupParser,
    PropertyJsonParser,
    PropertyYamlParser
)
