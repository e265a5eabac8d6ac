"""Data-file parser protocol and the extension dispatch table."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from importlib import import_module
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..core.models import OutputGeneratorBuilder
from ..exceptions import ConfigError
from .entity import EntityParser

logger = logging.getLogger(__name__)


@runtime_checkable
class DataFileParser(Protocol):
    """Contributes data-model entries for the data files it claims."""

    def provide_properties_from_file(
        self, path: Path, builder: OutputGeneratorBuilder
    ) -> None:
        """Add entries for ``path`` to the builder's data model.

        Implementations must leave every other builder field alone and raise
        ``ParseError`` when the file cannot be read or interpreted.
        """
        ...


ExtensionTable = dict[str, DataFileParser]


def extension_of(path: Path) -> str | None:
    """Return the file name's suffix from its last ``.`` inclusive."""
    name = path.name
    index = name.rfind(".")
    if index < 0:
        return None
    return name[index:]


def default_extension_table() -> ExtensionTable:
    return {".json": EntityParser()}


def resolve_parser(reference: str) -> DataFileParser:
    """Import a parser from a ``module:attribute`` reference.

    Classes are instantiated without arguments; anything else is used as is.
    """
    module_name, sep, attr_name = reference.partition(":")
    if not sep or not module_name or not attr_name:
        raise ConfigError(f"Parser reference must be MODULE:ATTRIBUTE, got: {reference!r}")

    try:
        module = import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"Cannot import parser module {module_name!r}: {exc}") from exc

    try:
        target = getattr(module, attr_name)
    except AttributeError as exc:
        raise ConfigError(f"Module {module_name!r} has no attribute {attr_name!r}") from exc

    parser = target() if inspect.isclass(target) else target
    if not isinstance(parser, DataFileParser):
        raise ConfigError(
            f"{reference} does not provide provide_properties_from_file(path, builder)"
        )
    return parser


def build_extension_table(references: Mapping[str, str] | None = None) -> ExtensionTable:
    """Build the extension table from the defaults plus configured parsers.

    Args:
        references: Mapping of extension (e.g. ``".yaml"``) to parser reference

    Returns:
        Extension to parser mapping, read-only for the rest of the run
    """
    table = default_extension_table()
    for extension, reference in (references or {}).items():
        if not extension.startswith(".") or len(extension) < 2:
            raise ConfigError(f"Extension must start with '.', got: {extension!r}")
        table[extension] = resolve_parser(reference)
        logger.debug(f"Registered parser {reference} for {extension}")

    return table
