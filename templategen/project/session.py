"""Project model: descriptor files and project-scoped properties."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from ..exceptions import ConfigError
from ..rendering.io import last_modified_ms

logger = logging.getLogger(__name__)

DESCRIPTOR_NAME = "pyproject.toml"
TOOL_TABLE = "templategen"

# Keys of [tool.templategen] that describe the project rather than settings
_PROJECT_KEYS = {"properties", "members"}


class ProjectDescriptor(BaseModel):
    """A project as seen by the generator."""

    descriptor_path: Path = Field(..., description="Project descriptor file")
    properties: dict[str, str] = Field(
        default_factory=dict, description="Project-scoped string properties"
    )

    def descriptor_last_modified(self) -> int:
        """Modification time of the descriptor file in epoch ms (0 if missing)."""
        return last_modified_ms(self.descriptor_path)


class ProjectSession(BaseModel):
    """All projects of a run and the one being generated for."""

    current: ProjectDescriptor = Field(..., description="Project being generated")
    projects: list[ProjectDescriptor] = Field(
        default_factory=list, description="Every known project, current included"
    )

    def all_projects(self) -> list[ProjectDescriptor]:
        return self.projects

    def current_project(self) -> ProjectDescriptor:
        return self.current


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def _read_descriptor(descriptor_path: Path) -> dict[str, Any]:
    if not descriptor_path.is_file():
        return {}
    try:
        with descriptor_path.open("rb") as handle:
            return tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Cannot read project descriptor {descriptor_path}: {exc}") from exc


def _tool_table(document: dict[str, Any], descriptor_path: Path) -> dict[str, Any]:
    tool = document.get("tool", {})
    if not isinstance(tool, dict):
        raise ConfigError(f"[tool] must be a table in {descriptor_path}")
    table = tool.get(TOOL_TABLE, {})
    if not isinstance(table, dict):
        raise ConfigError(f"[tool.{TOOL_TABLE}] must be a table in {descriptor_path}")
    return table


def _load_tool_table(project_root: Path) -> tuple[Path, dict[str, Any]]:
    descriptor_path = project_root / DESCRIPTOR_NAME
    return descriptor_path, _tool_table(_read_descriptor(descriptor_path), descriptor_path)


def _project_from_table(descriptor_path: Path, table: dict[str, Any]) -> ProjectDescriptor:
    raw_properties = table.get("properties", {})
    if not isinstance(raw_properties, dict):
        raise ConfigError(
            f"[tool.{TOOL_TABLE}.properties] must be a table in {descriptor_path}"
        )

    return ProjectDescriptor(
        descriptor_path=descriptor_path,
        properties={str(k): _stringify(v) for k, v in raw_properties.items()},
    )


def read_tool_table(project_root: Path) -> dict[str, Any]:
    """Return the generator settings declared in ``[tool.templategen]``.

    Args:
        project_root: Directory holding the project descriptor

    Returns:
        Settings keys, without the project-level ``properties``/``members``
    """
    _, table = _load_tool_table(project_root)
    return {k: v for k, v in table.items() if k not in _PROJECT_KEYS}


def load_project(project_root: Path) -> ProjectDescriptor:
    """Load a single project from its root directory.

    Args:
        project_root: Directory holding ``pyproject.toml``

    Returns:
        Project descriptor with its ``[tool.templategen.properties]``
    """
    return _project_from_table(*_load_tool_table(project_root))


def load_session(project_root: Path) -> ProjectSession:
    """Load the project at ``project_root`` and its declared members.

    Members are listed as directories relative to the root in
    ``[tool.templategen] members = [...]``.
    """
    descriptor_path, table = _load_tool_table(project_root)
    current = _project_from_table(descriptor_path, table)

    members = table.get("members", [])
    if not isinstance(members, list):
        raise ConfigError(
            f"[tool.{TOOL_TABLE}] members must be a list in {descriptor_path}"
        )

    projects = [current]
    projects.extend(load_project(project_root / str(member)) for member in members)

    logger.debug(f"Loaded session with {len(projects)} project(s) from {project_root}")
    return ProjectSession(current=current, projects=projects)
