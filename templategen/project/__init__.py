"""Project model consumed by the generator."""

from .session import (
    ProjectDescriptor,
    ProjectSession,
    load_project,
    load_session,
    read_tool_table,
)

__all__ = [
    "ProjectDescriptor",
    "ProjectSession",
    "load_project",
    "load_session",
    "read_tool_table",
]
