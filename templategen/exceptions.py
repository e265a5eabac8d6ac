"""Errors raised while generating output files."""

from __future__ import annotations

from pathlib import Path


class GenerationError(Exception):
    """Base class for every failure that aborts a generation run."""


class ConfigError(GenerationError):
    """Raised when the run is misconfigured or a task is incomplete."""


class UnknownExtensionError(GenerationError):
    """Raised when no data-file parser is registered for a file's extension."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Unknown file extension: {path}")


class ParseError(GenerationError):
    """Raised when a data-file parser cannot interpret its input."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Could not parse data file {path}: {reason}")


def _with_cause(message: str, cause: BaseException | None) -> str:
    return f"{message} ({cause})" if cause is not None else message


class TemplateLoadError(GenerationError):
    """Raised when the template engine cannot resolve or compile a template."""

    def __init__(self, template_name: str, cause: BaseException | None = None) -> None:
        self.template_name = template_name
        super().__init__(
            _with_cause(f"Could not read template: {template_name}", cause)
        )


class RenderError(GenerationError):
    """Raised when rendering a template or writing its output fails."""

    def __init__(self, data_file: Path, cause: BaseException | None = None) -> None:
        self.data_file = data_file
        super().__init__(
            _with_cause(
                f"Could not process template associated with data file: {data_file}",
                cause,
            )
        )
