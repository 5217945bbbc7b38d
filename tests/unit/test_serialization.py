"""Unit tests for discriminated serialization."""

import json

import pytest

from data_import_utility.catalog import BUILTIN_TYPES
from data_import_utility.comparisons import (
    ComparisonOperation,
    EqualsOperation,
    GreaterThanOperation,
    InOperation,
)
from data_import_utility.exceptions import TypeResolutionError
from data_import_utility.registry import TypeRegistry
from data_import_utility.rules import (
    CombineFieldsRule,
    ConstantValueRule,
    CopyRule,
    CustomFieldlessRule,
    FieldAccessRule,
    IgnoreRule,
    MappingRule,
    StaticValueRule,
)
from data_import_utility.serialization import dumps, from_dict, get_field, loads, to_dict
from data_import_utility.transformations import (
    CalculateTransformation,
    CombineFieldsTransformation,
    ConditionalTransformation,
    FieldTransformation,
    InterpolateTransformation,
    MapTransformation,
    RegexMatchTransformation,
    SubstringTransformation,
    ValueMap,
    ValueTransformation,
)


def _nested_rule() -> CustomFieldlessRule:
    return CustomFieldlessRule(
        "5",
        value_transformations=[
            ConditionalTransformation(
                GreaterThanOperation(FieldAccessRule("amount"), StaticValueRule(100)),
                CopyRule.for_field("first", SubstringTransformation(0, 4)),
                StaticValueRule("small"),
            ),
            MapTransformation("x", [ValueMap(imported_field_name="x", from_value="a", to_value="b")]),
            CalculateTransformation("${0} * 2", 1),
        ],
    )


def _sample(cls: type) -> object:
    """Build an instance of a built-in type with non-default configuration."""
    samples = {
        IgnoreRule: lambda: IgnoreRule("skipped"),
        CopyRule: lambda: CopyRule.for_field("first", SubstringTransformation(0, 4)),
        ConstantValueRule: lambda: ConstantValueRule("fixed"),
        CombineFieldsRule: lambda: CombineFieldsRule(
            "${0}-${1}",
            [
                FieldTransformation("first"),
                FieldTransformation("last", [InterpolateTransformation("<${0}>")]),
            ],
        ),
        CustomFieldlessRule: _nested_rule,
        FieldAccessRule: lambda: FieldAccessRule("amount"),
        StaticValueRule: lambda: StaticValueRule(100),
        SubstringTransformation: lambda: SubstringTransformation(-3, 2),
        RegexMatchTransformation: lambda: RegexMatchTransformation(r"(\d+)-(\d+)"),
        InterpolateTransformation: lambda: InterpolateTransformation("${1}/${0}"),
        MapTransformation: lambda: MapTransformation(
            "code", [ValueMap(imported_field_name="code", from_value="a", to_value="b")]
        ),
        CalculateTransformation: lambda: CalculateTransformation("${0} * 2", 3),
        CombineFieldsTransformation: lambda: CombineFieldsTransformation(
            "${0} ${1}", [FieldTransformation("first"), FieldTransformation("last")]
        ),
        ConditionalTransformation: lambda: ConditionalTransformation(
            EqualsOperation(FieldAccessRule("code"), StaticValueRule("a")),
            ConstantValueRule("yes"),
            ConstantValueRule("no"),
        ),
    }
    if cls in samples:
        return samples[cls]()
    operation = cls(
        FieldAccessRule("amount"),
        StaticValueRule(5),
        StaticValueRule(1),
        StaticValueRule(10),
    )
    if isinstance(operation, InOperation):
        operation.configure_values([StaticValueRule("a"), ConstantValueRule("b")])
    return operation


def _base_of(cls: type) -> type:
    for base in (MappingRule, ValueTransformation, ComparisonOperation):
        if issubclass(cls, base):
            return base
    raise AssertionError(f"{cls.__name__} has no serializable base")


class TestSerialization:
    """Tests for typeId-discriminated payloads."""

    def test_nested_round_trip(self):
        """Nested rules, transformations and comparisons survive a round trip."""
        rule = _nested_rule()

        restored = loads(dumps(rule), MappingRule)

        assert restored == rule
        conditional = restored.value_transformations[0]
        assert isinstance(conditional.comparison_operation, GreaterThanOperation)
        assert isinstance(conditional.true_mapping_rule, CopyRule)
        assert restored.value_transformations[2].decimal_places == 1

    @pytest.mark.parametrize("cls", BUILTIN_TYPES, ids=lambda cls: cls.__name__)
    def test_every_builtin_type_round_trips(self, cls):
        original = _sample(cls)
        base = _base_of(cls)

        restored = loads(dumps(original), base)

        assert type(restored) is cls
        assert restored == original
        assert from_dict(to_dict(original), base) == original

    def test_to_dict_carries_type_id(self):
        payload = to_dict(SubstringTransformation(1, 2))

        assert payload["typeId"] == "Core.SubstringTransformation"
        assert json.loads(payload["transformationDetail"]) == {"StartIndex": 1, "MaxLength": 2}

    def test_pascal_case_payload(self):
        payload = {
            "TypeId": "Core.CopyRule",
            "RuleDetail": None,
            "SourceFieldTransformations": [
                {
                    "FieldName": "first",
                    "ValueTransformations": [
                        {
                            "TypeId": "Core.SubstringTransformation",
                            "TransformationDetail": '{"StartIndex": 0, "MaxLength": 4}',
                        }
                    ],
                }
            ],
        }

        rule = from_dict(payload, MappingRule)

        assert rule == CopyRule.for_field("first", SubstringTransformation(0, 4))

    def test_unknown_type_id(self):
        with pytest.raises(TypeResolutionError, match="Unknown typeId"):
            from_dict({"typeId": "Core.Nope"}, MappingRule)

    def test_wrong_base_type(self):
        with pytest.raises(TypeResolutionError, match="is not a MappingRule"):
            from_dict({"typeId": "Core.Equals"}, MappingRule)

    @pytest.mark.parametrize("payload", [{}, {"typeId": ""}, {"typeId": 5}])
    def test_missing_or_blank_type_id(self, payload):
        with pytest.raises(TypeResolutionError):
            from_dict(payload, ValueTransformation)

    def test_non_mapping_payload(self):
        with pytest.raises(TypeResolutionError):
            from_dict(["Core.CopyRule"], MappingRule)  # type: ignore[arg-type]

    def test_invalid_json(self):
        with pytest.raises(TypeResolutionError, match="Invalid JSON"):
            loads("{", ComparisonOperation)

    def test_custom_registry(self):
        """A separate registry only knows its own types."""
        registry = TypeRegistry()
        registry.register(CopyRule)

        assert isinstance(from_dict({"typeId": "Core.CopyRule"}, MappingRule, registry=registry), CopyRule)
        with pytest.raises(TypeResolutionError):
            from_dict({"typeId": "Core.IgnoreRule"}, MappingRule, registry=registry)

    def test_get_field_accepts_pascal_case(self):
        assert get_field({"FieldName": "a"}, "fieldName") == "a"
        assert get_field({"fieldName": "b", "FieldName": "a"}, "fieldName") == "b"
        assert get_field({}, "fieldName", "default") == "default"
