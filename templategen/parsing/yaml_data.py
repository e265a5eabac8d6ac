"""YAML data files whose top-level mapping becomes the data model."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import yaml

from ..exceptions import ParseError

if TYPE_CHECKING:
    from ..core.models import OutputGeneratorBuilder

logger = logging.getLogger(__name__)


class YamlDataParser:
    """Contributes every top-level key of a YAML mapping.

    ``entityName`` defaults to the file stem unless the document sets it.
    Register it for ``.yaml``/``.yml`` through the ``extensions`` setting.
    """

    def provide_properties_from_file(
        self, path: Path, builder: OutputGeneratorBuilder
    ) -> None:
        try:
            with path.open(encoding="utf-8") as handle:
                data = yaml.safe_load(handle)
        except OSError as exc:
            raise ParseError(path, f"cannot read file: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ParseError(path, f"invalid YAML: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ParseError(path, "top-level YAML document must be a mapping")

        builder.add_to_data_model("entityName", path.stem)
        for key, value in data.items():
            builder.add_to_data_model(str(key), value)

        logger.debug(f"Loaded {len(data)} key(s) from {path}")
