"""Shared fixtures for the generator test suite."""

from __future__ import annotations

from pathlib import Path

import pytest
from jinja2 import Environment

from templategen.parsing import default_extension_table
from templategen.project import ProjectSession, load_session
from templategen.rendering.engine import create_environment
from templategen.traversal import GeneratingFileVisitor

PYPROJECT = """\
[project]
name = "demo"

[tool.templategen.properties]
basePackage = "com.example"
release = true
"""


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "templates"
    directory.mkdir()
    (directory / "foo.ftl").write_text("hello ${entityName}")
    return directory


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "data"
    directory.mkdir()
    return directory


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "out"


@pytest.fixture
def environment(template_dir: Path) -> Environment:
    return create_environment(template_dir, "3.0")


@pytest.fixture
def session(tmp_path: Path) -> ProjectSession:
    (tmp_path / "pyproject.toml").write_text(PYPROJECT)
    return load_session(tmp_path)


@pytest.fixture
def visitor(
    environment: Environment,
    session: ProjectSession,
    template_dir: Path,
    output_dir: Path,
) -> GeneratingFileVisitor:
    return GeneratingFileVisitor(
        environment, session, default_extension_table(), template_dir, output_dir
    )
