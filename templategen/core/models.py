"""Domain models for a single generation task."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, Template
from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import ConfigError, RenderError, TemplateLoadError
from ..rendering import engine
from ..rendering.io import atomic_writer, last_modified_ms, output_path_for

logger = logging.getLogger(__name__)


class OutputGenerator(BaseModel):
    """Knows how to generate output files for one data file.

    A generator is built from five things: the latest modification time of
    the project descriptor(s), the data file that triggered it, the templates
    to render, the output directory, and the data model used to fill out the
    templates. Instances are immutable; use :meth:`builder` to assemble one.
    """

    model_config = ConfigDict(frozen=True)

    pom_modified_timestamp: int = Field(
        ..., description="Latest project descriptor mtime (epoch ms)"
    )
    generator_location: Path = Field(..., description="Data file path")
    template_locations: tuple[Path, ...] = Field(..., description="Template paths")
    output_dir: Path = Field(..., description="Output directory")
    data_model: dict[str, Any] = Field(..., description="Template data model")
    file_mode: int = Field(default=0o644, description="File permissions (octal)")

    @staticmethod
    def builder() -> OutputGeneratorBuilder:
        return OutputGeneratorBuilder()

    def template_outputs(self) -> dict[Path, Path]:
        """Map each template path to the output file it renders into."""
        return {
            template: output_path_for(self.generator_location, template, self.output_dir)
            for template in self.template_locations
        }

    def generate(self, environment: Environment) -> list[Path]:
        """Render every template against the data model.

        Checks the ages of the inputs against an existing output file to skip
        work when there is no update.

        Args:
            environment: Used to load each template by its name

        Returns:
            Output files that were written
        """
        written: list[Path] = []
        for template_file, output_file in self.template_outputs().items():
            if not output_file.exists():
                # NOTE: never true for a missing file (mtime 0); kept as is so
                # every pair is re-rendered.
                output_modified = last_modified_ms(output_file)
                if (
                    output_modified > last_modified_ms(self.generator_location)
                    and output_modified > last_modified_ms(template_file)
                    and output_modified > self.pom_modified_timestamp
                ):
                    logger.debug(f"Up to date, skipping {output_file}")
                    continue
            elif self.output_dir.is_file():
                raise ConfigError(
                    "Parent directory of output file is a file: "
                    f"{self.output_dir.absolute()}"
                )

            try:
                template = engine.load_template(environment, template_file)
            except Exception as exc:
                raise TemplateLoadError(template_file.name, exc) from exc

            self._write(template, output_file)
            logger.debug(f"Rendered {template_file.name} → {output_file}")
            written.append(output_file)

        return written

    def _write(self, template: Template, output_file: Path) -> None:
        if self.output_dir.exists() and not self.output_dir.is_dir():
            raise ConfigError(
                f"Output directory is not a directory: {self.output_dir.absolute()}"
            )

        try:
            with atomic_writer(output_file, mode=self.file_mode) as writer:
                engine.render_to(template, self.data_model, writer)
        except Exception as exc:
            raise RenderError(self.generator_location, exc) from exc


class OutputGeneratorBuilder:
    """Fluent builder for :class:`OutputGenerator`.

    Lets the generator be assembled from several places, e.g. the traversal
    fills in locations while a data-file parser contributes the data model.
    """

    def __init__(self) -> None:
        self.pom_modified_timestamp: int | None = None
        self.generator_location: Path | None = None
        self.template_locations: list[Path] | None = None
        self.output_dir: Path | None = None
        self.data_model: dict[str, Any] | None = None
        self.file_mode: int = 0o644

    def add_pom_last_modified_timestamp(
        self, pom_modified_timestamp: int
    ) -> OutputGeneratorBuilder:
        self.pom_modified_timestamp = pom_modified_timestamp
        return self

    def add_generator_location(self, generator_location: Path) -> OutputGeneratorBuilder:
        self.generator_location = generator_location
        return self

    def add_template_locations(
        self, template_locations: list[Path]
    ) -> OutputGeneratorBuilder:
        self.template_locations = template_locations
        return self

    def add_out_dir(self, output_dir: Path) -> OutputGeneratorBuilder:
        self.output_dir = output_dir
        return self

    def add_file_mode(self, file_mode: int) -> OutputGeneratorBuilder:
        self.file_mode = file_mode
        return self

    def add_data_model(self, data_model: dict[str, Any]) -> OutputGeneratorBuilder:
        self.data_model = data_model
        return self

    def add_to_data_model(self, key: str, value: Any) -> OutputGeneratorBuilder:
        if self.data_model is None:
            self.data_model = {}
        self.data_model[key] = value
        return self

    def create(self) -> OutputGenerator:
        """Finalize the builder.

        Returns:
            A new, immutable output generator

        Raises:
            ConfigError: if any part of the generator was not set
        """
        if self.pom_modified_timestamp is None:
            raise ConfigError("Must set the pom_modified_timestamp")
        if self.generator_location is None:
            raise ConfigError("Must set a non-null generator_location")
        if self.template_locations is None:
            raise ConfigError("Must set a non-null template_locations")
        if self.output_dir is None:
            raise ConfigError("Must set a non-null output_dir")
        if self.data_model is None:
            raise ConfigError("Must set a non-null data_model")

        return OutputGenerator(
            pom_modified_timestamp=self.pom_modified_timestamp,
            generator_location=self.generator_location,
            template_locations=tuple(self.template_locations),
            output_dir=self.output_dir,
            data_model=self.data_model,
            file_mode=self.file_mode,
        )
