"""Data-file traversal."""

from .visitor import GeneratingFileVisitor, list_templates, walk_files

__all__ = ["GeneratingFileVisitor", "list_templates", "walk_files"]
