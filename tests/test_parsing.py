"""Tests for data-file parsers and extension dispatch."""

from __future__ import annotations

from pathlib import Path

import pytest

from templategen.core import OutputGenerator
from templategen.exceptions import ConfigError, ParseError
from templategen.parsing import (
    EntityParser,
    YamlDataParser,
    build_extension_table,
    default_extension_table,
    extension_of,
    resolve_parser,
)


class RecordingParser:
    def provide_properties_from_file(self, path, builder) -> None:
        builder.add_to_data_model("recorded", path.name)


class TestExtensionOf:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Bar.json", ".json"),
            ("archive.tar.gz", ".gz"),
            (".hidden", ".hidden"),
            ("trailing.", "."),
            ("README", None),
        ],
    )
    def test_suffix_from_last_dot(self, name: str, expected: str | None) -> None:
        assert extension_of(Path("data") / name) == expected


class TestEntityParser:
    def test_contributes_only_entity_name(self, tmp_path: Path) -> None:
        path = tmp_path / "Customer.json"
        path.write_text('{"ignored": true}')
        builder = OutputGenerator.builder()

        EntityParser().provide_properties_from_file(path, builder)

        assert builder.data_model == {"entityName": "Customer"}

    def test_contents_are_not_read(self, tmp_path: Path) -> None:
        builder = OutputGenerator.builder()

        EntityParser().provide_properties_from_file(tmp_path / "Ghost.json", builder)

        assert builder.data_model == {"entityName": "Ghost"}

    def test_other_builder_fields_untouched(self, tmp_path: Path) -> None:
        builder = OutputGenerator.builder()

        EntityParser().provide_properties_from_file(tmp_path / "X.json", builder)

        assert builder.pom_modified_timestamp is None
        assert builder.generator_location is None
        assert builder.template_locations is None
        assert builder.output_dir is None

    @pytest.mark.parametrize("name", [".json", "a.js", "x"])
    def test_short_names_are_rejected(self, tmp_path: Path, name: str) -> None:
        with pytest.raises(ParseError):
            EntityParser().provide_properties_from_file(
                tmp_path / name, OutputGenerator.builder()
            )


class TestYamlDataParser:
    def test_mapping_keys_become_data_model(self, tmp_path: Path) -> None:
        path = tmp_path / "Order.yaml"
        path.write_text("fields:\n  - id\n  - total\ntable: orders\n")
        builder = OutputGenerator.builder()

        YamlDataParser().provide_properties_from_file(path, builder)

        assert builder.data_model == {
            "entityName": "Order",
            "fields": ["id", "total"],
            "table": "orders",
        }

    def test_document_can_set_entity_name(self, tmp_path: Path) -> None:
        path = tmp_path / "order.yaml"
        path.write_text("entityName: Order\n")
        builder = OutputGenerator.builder()

        YamlDataParser().provide_properties_from_file(path, builder)

        assert builder.data_model == {"entityName": "Order"}

    def test_empty_document_gives_entity_name_only(self, tmp_path: Path) -> None:
        path = tmp_path / "Empty.yaml"
        path.write_text("")
        builder = OutputGenerator.builder()

        YamlDataParser().provide_properties_from_file(path, builder)

        assert builder.data_model == {"entityName": "Empty"}

    def test_malformed_yaml_fails(self, tmp_path: Path) -> None:
        path = tmp_path / "Bad.yaml"
        path.write_text("key: [unclosed\n")

        with pytest.raises(ParseError, match="Bad.yaml"):
            YamlDataParser().provide_properties_from_file(path, OutputGenerator.builder())

    def test_non_mapping_document_fails(self, tmp_path: Path) -> None:
        path = tmp_path / "List.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ParseError, match="mapping"):
            YamlDataParser().provide_properties_from_file(path, OutputGenerator.builder())

    def test_unreadable_file_fails(self, tmp_path: Path) -> None:
        with pytest.raises(ParseError, match="cannot read"):
            YamlDataParser().provide_properties_from_file(
                tmp_path / "Missing.yaml", OutputGenerator.builder()
            )


class TestExtensionTable:
    def test_default_table_maps_json_to_entity_parser(self) -> None:
        table = default_extension_table()

        assert list(table) == [".json"]
        assert isinstance(table[".json"], EntityParser)

    def test_configured_parsers_are_added(self) -> None:
        table = build_extension_table(
            {".yaml": "templategen.parsing.yaml_data:YamlDataParser"}
        )

        assert isinstance(table[".json"], EntityParser)
        assert isinstance(table[".yaml"], YamlDataParser)

    def test_configured_parser_can_replace_default(self) -> None:
        table = build_extension_table({".json": f"{__name__}:RecordingParser"})

        assert isinstance(table[".json"], RecordingParser)

    def test_instances_are_used_as_is(self) -> None:
        parser = resolve_parser(f"{__name__}:RECORDER")

        assert parser is RECORDER

    @pytest.mark.parametrize(
        "reference",
        [
            "no_colon",
            "templategen.does_not_exist:Parser",
            "templategen.parsing:Missing",
            "templategen.exceptions:ConfigError",
        ],
    )
    def test_bad_references_fail(self, reference: str) -> None:
        with pytest.raises(ConfigError):
            build_extension_table({".x": reference})

    def test_extension_must_start_with_dot(self) -> None:
        with pytest.raises(ConfigError, match="start with"):
            build_extension_table({"yaml": "templategen.parsing:YamlDataParser"})


RECORDER = RecordingParser()
