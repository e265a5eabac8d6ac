"""Template rendering engine."""

from __future__ import annotations

import logging
import re
from importlib.metadata import version
from pathlib import Path
from typing import Any, TextIO

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template

from ..exceptions import ConfigError

logger = logging.getLogger(__name__)

_VERSION_PATTERN = re.compile(r"^\d+(?:\.\d+)*$")


def _version_tuple(value: str) -> tuple[int, ...]:
    return tuple(int(part) for part in value.split("."))


def check_engine_version(engine_version: str) -> None:
    """Reject engine versions that are malformed or newer than installed Jinja2.

    Args:
        engine_version: Minimum Jinja2 version the templates were written for
    """
    if not _VERSION_PATTERN.match(engine_version.strip()):
        raise ConfigError(f"Invalid template engine version: {engine_version!r}")

    installed_version = version("jinja2")
    installed = _version_tuple(".".join(re.findall(r"\d+", installed_version)[:3]))
    requested = _version_tuple(engine_version.strip())
    if requested > installed:
        raise ConfigError(
            f"Template engine version {engine_version} is newer than "
            f"installed Jinja2 {installed_version}"
        )


def create_environment(
    template_dir: Path,
    engine_version: str,
    *,
    variable_start: str = "${",
    variable_end: str = "}",
) -> Environment:
    """Create the Jinja2 environment templates are loaded and rendered with.

    Args:
        template_dir: Search root; templates are resolved by base name
        engine_version: Minimum Jinja2 version the templates were written for
        variable_start: Opening interpolation delimiter
        variable_end: Closing interpolation delimiter

    Returns:
        Configured Jinja2 environment
    """
    check_engine_version(engine_version)
    logger.debug(
        f"Creating template environment for {template_dir} "
        f"(engine version {engine_version})"
    )

    # Use the template directory as loader search path
    loader = FileSystemLoader(str(template_dir))
    return Environment(
        loader=loader,
        undefined=StrictUndefined,
        autoescape=False,
        variable_start_string=variable_start,
        variable_end_string=variable_end,
        keep_trailing_newline=True,
    )


def load_template(environment: Environment, template_path: Path) -> Template:
    """Load a template by its base name from the environment's search root."""
    return environment.get_template(template_path.name)


def render_to(template: Template, data_model: dict[str, Any], writer: TextIO) -> None:
    """Stream the rendered template into ``writer``."""
    template.stream(data_model).dump(writer)
