"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ..exceptions import GenerationError
from ..project import load_session
from ..runner import run_generation
from ..settings import load_settings
from .parsers import parse_extension, parse_file_mode

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="templategen",
    help="Render every template for every data file into an output directory.",
)


@app.callback()
def callback() -> None:
    """Build-time code generator driven by data files and Jinja2 templates."""


@app.command()
def generate(
    project_root: Annotated[
        Path,
        typer.Option(
            "--project-root",
            help="Directory holding pyproject.toml (default: cwd).",
            metavar="DIR",
        ),
    ] = Path("."),
    template_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--template-dir",
            help="Template directory, searched non-recursively.",
            metavar="DIR",
        ),
    ] = None,
    data_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--data-dir",
            help="Data-file directory, walked recursively.",
            metavar="DIR",
        ),
    ] = None,
    output_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--output-dir",
            help="Directory rendered files are written to.",
            metavar="DIR",
        ),
    ] = None,
    engine_version: Annotated[
        Optional[str],
        typer.Option(
            "--engine-version",
            help="Minimum Jinja2 version the templates were written for.",
            metavar="VERSION",
        ),
    ] = None,
    extensions: Annotated[
        list[str],
        typer.Option(
            "--extension",
            help="Register a data-file parser (format: EXT=MODULE:ATTR). Repeatable.",
            metavar="EXT=MODULE:ATTR",
        ),
    ] = [],
    file_mode: Annotated[
        Optional[str],
        typer.Option(
            "--mode",
            help="File permissions in octal (default: 0644).",
            metavar="OCTAL",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Generate output files from data files and templates."""
    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    logger.debug("Starting templategen")

    project_root = project_root.resolve()
    try:
        settings = load_settings(
            project_root,
            template_dir=template_dir,
            data_dir=data_dir,
            output_dir=output_dir,
            engine_version=engine_version,
            file_mode=parse_file_mode(file_mode) if file_mode else None,
            extensions=dict(map(parse_extension, extensions)),
        )
        session = load_session(project_root)
        outputs = run_generation(settings, session)
    except GenerationError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=1) from exc

    logger.info(f"Generated {len(outputs)} file(s) in {settings.output_dir}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
