"""Unit tests for TransformationPipeline and FieldTransformation."""

import asyncio

from data_import_utility.constants import Messages
from data_import_utility.transformations import (
    FieldTransformation,
    InterpolateTransformation,
    RegexMatchTransformation,
    SubstringTransformation,
    TransformationPipeline,
    TransformationResult,
)


def _run(pipeline: TransformationPipeline, value: object) -> TransformationResult:
    return asyncio.run(pipeline.execute(TransformationResult.from_value(value)))


class TestTransformationPipeline:
    """Tests for ordered execution of value transformations."""

    def test_empty_pipeline_returns_input(self):
        result = _run(TransformationPipeline(), "value")

        assert result.current_value == "value"
        assert result.applied_transformations == ()

    def test_regex_then_interpolate(self):
        """Collection output of one step feeds the placeholders of the next."""
        pipeline = TransformationPipeline()
        pipeline.add_transformation(RegexMatchTransformation(r"\d+"))
        pipeline.add_transformation(InterpolateTransformation("${0}|${1}"))

        result = _run(pipeline, "280-190533-1")

        assert result.current_value == "280|190533"
        assert result.original_value == "280-190533-1"
        assert result.applied_transformations == ("Regex", "Interpolate")

    def test_stops_at_first_failure(self):
        """Steps after a failed step do not run."""
        pipeline = TransformationPipeline(
            [
                RegexMatchTransformation(r"\d+"),
                SubstringTransformation(0, 2),
                InterpolateTransformation("never"),
            ]
        )

        result = _run(pipeline, "1-2")

        assert result.was_failure
        assert result.error_message == Messages.INVALID_FOR_COLLECTIONS
        assert result.applied_transformations == ("Regex",)

    def test_add_transformation_chains(self):
        pipeline = TransformationPipeline()

        returned = pipeline.add_transformation(SubstringTransformation(0, 1))

        assert returned is pipeline
        assert len(pipeline) == 1

    def test_clone_is_independent(self):
        pipeline = TransformationPipeline([SubstringTransformation(0, 1)])
        copy = pipeline.clone()
        copy.add_transformation(InterpolateTransformation())

        assert len(pipeline) == 1
        assert len(copy) == 2
        assert list(copy)[0] == list(pipeline)[0]
        assert list(copy)[0] is not list(pipeline)[0]

    def test_clear(self):
        pipeline = TransformationPipeline([SubstringTransformation(0, 1)])
        pipeline.clear()

        assert len(pipeline) == 0


class TestFieldTransformation:
    """Tests for reading a source field through its chain."""

    def test_apply_reads_field(self, sample_row):
        field = FieldTransformation("first", [SubstringTransformation(0, 4)])

        result = asyncio.run(field.apply(sample_row))

        assert result.original_value == "Test Input"
        assert result.current_value == "Test"
        assert result.record is sample_row

    def test_missing_field_fails(self, sample_row):
        result = asyncio.run(FieldTransformation("nope").apply(sample_row))

        assert result.error_message == Messages.FIELD_NOT_IN_TABLE.format(field="nope")

    def test_no_row_fails(self):
        assert asyncio.run(FieldTransformation("first").apply(None)).was_failure

    def test_apply_value(self):
        field = FieldTransformation("ignored", [InterpolateTransformation("<${0}>")])

        assert asyncio.run(field.apply_value("x")).current_value == "<x>"

    def test_round_trip(self):
        field = FieldTransformation(
            "first", [SubstringTransformation(1, 2), InterpolateTransformation("a${0}")]
        )

        assert FieldTransformation.from_dict(field.to_dict()) == field

    def test_from_dict_accepts_nested_field(self):
        """A nested field descriptor supplies the field name."""
        payload = {"Field": {"FieldName": "first"}, "ValueTransformations": []}

        assert FieldTransformation.from_dict(payload).field_name == "first"
