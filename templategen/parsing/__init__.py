"""Data-file parsers and extension dispatch."""

from .base import (
    DataFileParser,
    ExtensionTable,
    build_extension_table,
    default_extension_table,
    extension_of,
    resolve_parser,
)
from .entity import EntityParser
from .yaml_data import YamlDataParser

__all__ = [
    "DataFileParser",
    "EntityParser",
    "ExtensionTable",
    "YamlDataParser",
    "build_extension_table",
    "default_extension_table",
    "extension_of",
    "resolve_parser",
]
