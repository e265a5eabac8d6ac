"""Generation tasks and their builder."""

from .models import OutputGenerator, OutputGeneratorBuilder

__all__ = ["OutputGenerator", "OutputGeneratorBuilder"]
