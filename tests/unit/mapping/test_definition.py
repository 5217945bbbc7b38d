"""Unit tests for table definitions and mapping documents."""

import json

import pytest

from data_import_utility.infrastructure.io import DataSourceNotFoundError
from data_import_utility.mapping import (
    FieldMapping,
    ImportTableDefinition,
    MappingDefinition,
    load_mapping_definition,
    match_column,
    save_mapping_definition,
)
from data_import_utility.mapping.store import MappingDefinitionLoadError
from data_import_utility.rules import ConstantValueRule, CopyRule
from data_import_utility.transformations import SubstringTransformation


def _targets() -> list[FieldMapping]:
    return [
        FieldMapping("FirstName", str),
        FieldMapping("Age", int),
        FieldMapping("Country", str, ConstantValueRule("NL")),
    ]


class TestMatchColumn:
    """Tests for fuzzy source column matching."""

    def test_exact_match_ignores_case(self):
        assert match_column("age", ["Name", "AGE"]) == "AGE"

    def test_fuzzy_match(self):
        assert match_column("FirstName", ["First Name", "Status"]) == "First Name"

    def test_below_threshold(self):
        assert match_column("Country", ["First Name", "AGE"]) is None

    def test_no_columns(self):
        assert match_column("Age", []) is None


class TestImportTableDefinition:
    def test_refresh_describes_columns(self, people_frame):
        table = ImportTableDefinition(table_name="people")

        table.refresh_field_descriptors(people_frame)

        assert table.field_names == ["First Name", "AGE", "Status"]
        descriptor = table.field_descriptors[1]
        assert descriptor.for_table_name == "people"
        assert descriptor.field_type_string == "float"
        assert table.field_descriptors[2].value_set == ["A", "I"]

    def test_existing_descriptors_kept(self, people_frame):
        table = ImportTableDefinition(table_name="people")
        table.refresh_field_descriptors(people_frame[["AGE"]])

        table.refresh_field_descriptors(people_frame)
        assert table.field_names == ["AGE"]

        table.refresh_field_descriptors(people_frame, overwrite_existing=True)
        assert table.field_names == ["First Name", "AGE", "Status"]

    def test_auto_match(self, people_frame):
        """Unconfigured mappings get a copy rule for the closest column."""
        table = ImportTableDefinition(table_name="people")

        table.refresh_field_descriptors(people_frame, _targets(), auto_match=True)

        rules = {m.field_name: m.mapping_rule for m in table.field_mappings}
        assert rules["FirstName"] == CopyRule.for_field("First Name")
        assert rules["Age"] == CopyRule.for_field("AGE")
        assert rules["Country"] == ConstantValueRule("NL")

    def test_targets_are_copied(self, people_frame):
        targets = _targets()
        table = ImportTableDefinition(table_name="people")

        table.refresh_field_descriptors(people_frame, targets, auto_match=True)

        assert targets[0].mapping_rule is None

    def test_valid_existing_mappings_survive(self, people_frame):
        """Existing mappings survive only while their source fields exist."""
        table = ImportTableDefinition(
            table_name="people",
            field_mappings=[
                FieldMapping("FirstName", str, CopyRule.for_field("First Name", SubstringTransformation(0, 1))),
                FieldMapping("Age", int, CopyRule.for_field("Years")),
            ],
        )

        table.refresh_field_descriptors(people_frame, _targets())

        rules = {m.field_name: m.mapping_rule for m in table.field_mappings}
        assert rules["FirstName"] == CopyRule.for_field("First Name", SubstringTransformation(0, 1))
        assert rules["Age"] is None
        assert [m.field_name for m in table.field_mappings] == ["FirstName", "Age", "Country"]


class TestMappingDefinition:
    def test_get_table(self):
        definition = MappingDefinition(
            tables=[ImportTableDefinition(table_name="a"), ImportTableDefinition(table_name="b")]
        )

        assert definition.get_table().table_name == "a"
        assert definition.get_table("b").table_name == "b"
        with pytest.raises(KeyError):
            definition.get_table("c")
        with pytest.raises(KeyError):
            MappingDefinition().get_table()

    def test_dump_uses_camel_case(self):
        table = ImportTableDefinition(
            table_name="people", field_mappings=[FieldMapping("Age", int, CopyRule.for_field("AGE"))]
        )

        payload = MappingDefinition(tables=[table]).model_dump(by_alias=True)

        dumped = payload["tables"][0]
        assert dumped["tableName"] == "people"
        assert dumped["fieldMappings"][0]["mappingRule"]["typeId"] == "Core.CopyRule"


class TestMappingStore:
    """Tests for saving and loading mapping documents."""

    def test_save_and_load(self, tmp_path, people_frame):
        table = ImportTableDefinition(table_name="people")
        table.refresh_field_descriptors(people_frame, _targets(), auto_match=True)
        path = tmp_path / "nested" / "mappings.json"

        save_mapping_definition(MappingDefinition(tables=[table]), path)
        loaded = load_mapping_definition(path)

        restored = loaded.get_table("people")
        assert restored.field_mappings == table.field_mappings
        assert restored.field_names == table.field_names
        assert restored.field_descriptors[0].value_set == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataSourceNotFoundError):
            load_mapping_definition(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{")

        with pytest.raises(MappingDefinitionLoadError, match="Invalid JSON"):
            load_mapping_definition(path)

    def test_unknown_rule_type(self, tmp_path):
        path = tmp_path / "bad.json"
        payload = {
            "tables": [
                {
                    "tableName": "t",
                    "fieldMappings": [
                        {"fieldName": "A", "mappingRule": {"typeId": "Core.Nope"}}
                    ],
                }
            ]
        }
        path.write_text(json.dumps(payload))

        with pytest.raises(MappingDefinitionLoadError):
            load_mapping_definition(path)

    def test_loaded_mappings_apply(self, tmp_path):
        path = tmp_path / "m.json"
        table = ImportTableDefinition(
            table_name="t", field_mappings=[FieldMapping("Age", int, CopyRule.for_field("AGE"))]
        )
        save_mapping_definition(MappingDefinition(tables=[table]), path)

        mapping = load_mapping_definition(path).get_table().field_mappings[0]

        assert isinstance(mapping.mapping_rule, CopyRule)
        assert mapping.field_type is int
