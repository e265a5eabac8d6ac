"""Templategen - data-file driven template renderer.

Renders every template against every data file and writes the results into
an output directory, in the spirit of a build-time code generator.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export main CLI entry point
from .cli import main

__all__ = ["main"]
