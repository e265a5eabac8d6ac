"""Traversal of the data-file tree."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from jinja2 import Environment

from ..core.models import OutputGenerator
from ..exceptions import UnknownExtensionError
from ..parsing import ExtensionTable, extension_of
from ..project import ProjectSession

logger = logging.getLogger(__name__)

POM_PROPERTIES_KEY = "pomProperties"


def list_templates(template_dir: Path) -> list[Path]:
    """Immediate children of the template directory, sorted by name."""
    if not template_dir.is_dir():
        return []
    return sorted(template_dir.iterdir(), key=lambda p: p.name)


def walk_files(root: Path) -> Iterator[Path]:
    """Yield non-directory entries under ``root`` depth-first, sorted by name.

    Symbolic links to directories are not followed.
    """
    with os.scandir(root) as it:
        entries = sorted(it, key=lambda e: e.name)
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            yield from walk_files(Path(entry.path))
        else:
            yield Path(entry.path)


class GeneratingFileVisitor:
    """Turns every data file into a generation task and runs it.

    Each data file is dispatched by extension to a data-file parser that
    fills in the data model; the project's properties are added under
    ``pomProperties`` before the task renders every template.
    """

    def __init__(
        self,
        environment: Environment,
        session: ProjectSession,
        extension_table: ExtensionTable,
        template_dir: Path,
        output_dir: Path,
        file_mode: int = 0o644,
    ) -> None:
        self.environment = environment
        self.session = session
        self.extension_table = extension_table
        self.template_dir = template_dir
        self.output_dir = output_dir
        self.file_mode = file_mode
        self.pom_last_modified_timestamp = max(
            (project.descriptor_last_modified() for project in session.all_projects()),
            default=0,
        )

    def visit_file(self, path: Path) -> list[Path]:
        """Generate the outputs for one data file.

        Args:
            path: Data file; anything but a regular file is ignored

        Returns:
            Output files written for this data file
        """
        if not path.is_file() or path.is_symlink():
            return []

        builder = (
            OutputGenerator.builder()
            .add_generator_location(path)
            .add_pom_last_modified_timestamp(self.pom_last_modified_timestamp)
            .add_template_locations(list_templates(self.template_dir))
            .add_out_dir(self.output_dir)
            .add_file_mode(self.file_mode)
        )

        extension = extension_of(path)
        parser = self.extension_table.get(extension) if extension else None
        if parser is None:
            raise UnknownExtensionError(path)

        parser.provide_properties_from_file(path, builder)
        builder.add_to_data_model(
            POM_PROPERTIES_KEY, self.session.current_project().properties
        )

        logger.debug(f"Generating from {path}")
        return builder.create().generate(self.environment)

    def walk(self, root: Path) -> list[Path]:
        """Visit every file under ``root``; stops at the first error."""
        written: list[Path] = []
        for path in walk_files(root):
            written.extend(self.visit_file(path))
        return written
