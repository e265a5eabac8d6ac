"""Entity data files: the file name alone names the generated entity."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from ..exceptions import ParseError

if TYPE_CHECKING:
    from ..core.models import OutputGeneratorBuilder

# Length of the ".json" suffix stripped from the file name
_SUFFIX_LENGTH = 5


class EntityParser:
    """Contributes ``entityName`` derived from a ``.json`` data file's name.

    The file contents are not read.
    """

    def provide_properties_from_file(
        self, path: Path, builder: OutputGeneratorBuilder
    ) -> None:
        builder.add_to_data_model("entityName", self.entity_name(path))

    @staticmethod
    def entity_name(path: Path) -> str:
        file_name = path.name
        if len(file_name) <= _SUFFIX_LENGTH:
            raise ParseError(path, "file name too short to hold an entity name")
        return file_name[:-_SUFFIX_LENGTH]
