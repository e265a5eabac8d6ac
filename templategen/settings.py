"""Generator settings from CLI options, pyproject.toml and environment."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError
from .project import read_tool_table


class GeneratorSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TEMPLATEGEN_", case_sensitive=False)

    engine_version: str = "3.0"
    template_dir: Path = Path("codegen/templates")
    data_dir: Path = Path("codegen/data")
    output_dir: Path = Path("build/generated")
    file_mode: int = 0o644
    variable_start: str = "${"
    variable_end: str = "}"
    extensions: dict[str, str] = Field(default_factory=dict)

    @field_validator("file_mode", mode="before")
    @classmethod
    def _parse_octal(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return int(value, 8)
            except ValueError as e:
                raise ValueError(f"Invalid octal mode: {value!r}") from e
        return value

    def resolve_paths(self, project_root: Path) -> GeneratorSettings:
        """Anchor relative directories at the project root."""
        return self.model_copy(
            update={
                name: getattr(self, name)
                if getattr(self, name).is_absolute()
                else project_root / getattr(self, name)
                for name in ("template_dir", "data_dir", "output_dir")
            }
        )


def load_settings(project_root: Path, **overrides: Any) -> GeneratorSettings:
    """Load settings for the project at ``project_root``.

    Precedence: ``overrides`` (CLI options), then ``[tool.templategen]`` in
    ``pyproject.toml``, then ``TEMPLATEGEN_*`` environment variables, then
    defaults. ``None`` overrides are ignored; extension overrides are merged
    into the configured ones.

    Args:
        project_root: Directory holding ``pyproject.toml``
        **overrides: Explicit setting values

    Returns:
        Settings with directories resolved against ``project_root``
    """
    values = read_tool_table(project_root)

    configured = values.get("extensions") or {}
    if not isinstance(configured, dict):
        raise ConfigError("extensions must map EXT to MODULE:ATTR")
    extensions = dict(configured)
    extensions.update(overrides.pop("extensions", None) or {})
    if extensions:
        values["extensions"] = extensions

    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        settings = GeneratorSettings(**values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid generator settings: {exc}") from exc

    return settings.resolve_paths(project_root)
