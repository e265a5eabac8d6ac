"""CLI argument parsers and validators."""

from __future__ import annotations

import typer


def parse_extension(value: str) -> tuple[str, str]:
    """Parse an extension argument in format EXT=MODULE:ATTR."""
    if "=" not in value:
        raise typer.BadParameter(f"Must be EXT=MODULE:ATTR, got: {value!r}")
    ext, reference = value.split("=", 1)
    ext = ext.strip()
    if not ext.startswith("."):
        ext = f".{ext}"
    if ":" not in reference:
        raise typer.BadParameter(f"Parser must be MODULE:ATTR, got: {reference!r}")
    return ext, reference.strip()


def parse_file_mode(value: str) -> int:
    """Parse octal file mode string."""
    try:
        return int(value, 8)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid octal mode: {value!r}") from e
