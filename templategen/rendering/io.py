"""File I/O operations for rendering."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

OUTPUT_SUFFIX = ".java"


def output_path_for(
    generator_location: Path, template_location: Path, output_dir: Path
) -> Path:
    """Name the output of rendering one template for one data file.

    The data file name and template name are concatenated with no separator,
    extensions included: ``Bar.json`` + ``foo.ftl`` -> ``Bar.jsonfoo.ftl.java``.
    """
    return output_dir / (generator_location.name + template_location.name + OUTPUT_SUFFIX)


def last_modified_ms(path: Path) -> int:
    """Return the modification time of ``path`` in epoch milliseconds.

    Paths that cannot be stat'ed (missing files included) report 0.
    """
    try:
        return path.stat().st_mtime_ns // 1_000_000
    except OSError:
        return 0


def ensure_parent(path: Path) -> None:
    """Ensure parent directories exist for the given path.

    Args:
        path: Path whose parent directories should be created
    """
    path.parent.mkdir(parents=True, exist_ok=True)


@contextmanager
def atomic_writer(path: Path, mode: int = 0o644) -> Iterator[TextIO]:
    """Open a text writer whose content replaces ``path`` only on success.

    Args:
        path: Destination file path
        mode: File permissions (octal)

    Yields:
        Text handle on a temporary file next to ``path``
    """
    ensure_parent(path)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            yield tmp
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
        os.chmod(path, mode)
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
