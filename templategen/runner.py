"""End-to-end generation run for a configured project."""

from __future__ import annotations

import logging
from pathlib import Path

from .exceptions import ConfigError
from .parsing import build_extension_table
from .project import ProjectSession
from .rendering.engine import create_environment
from .settings import GeneratorSettings
from .traversal import GeneratingFileVisitor

logger = logging.getLogger(__name__)


def _require_dir(path: Path, label: str) -> None:
    if not path.is_dir():
        raise ConfigError(f"Required {label} directory does not exist: {path}")


def run_generation(settings: GeneratorSettings, session: ProjectSession) -> list[Path]:
    """Render every template for every data file under the data directory.

    Args:
        settings: Resolved generator settings
        session: Project model the run belongs to

    Returns:
        Output files that were written
    """
    _require_dir(settings.template_dir, "template")
    _require_dir(settings.data_dir, "data")

    if not settings.output_dir.exists():
        try:
            settings.output_dir.mkdir(parents=True)
        except OSError as exc:
            raise ConfigError(
                f"Cannot create output directory {settings.output_dir}: {exc}"
            ) from exc

    extension_table = build_extension_table(settings.extensions)
    environment = create_environment(
        settings.template_dir,
        settings.engine_version,
        variable_start=settings.variable_start,
        variable_end=settings.variable_end,
    )

    logger.debug(
        f"Generating from {settings.data_dir} with templates in "
        f"{settings.template_dir} into {settings.output_dir}"
    )

    visitor = GeneratingFileVisitor(
        environment,
        session,
        extension_table,
        settings.template_dir,
        settings.output_dir,
        file_mode=settings.file_mode,
    )
    return visitor.walk(settings.data_dir)
