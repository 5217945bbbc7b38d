"""Unit tests for table-level mapping application."""

import asyncio
from io import StringIO

import pandas as pd
import pytest
from rich.console import Console

from data_import_utility.comparisons import EqualsOperation
from data_import_utility.config import EngineConfig
from data_import_utility.constants import Messages
from data_import_utility.exceptions import (
    MissingFieldMappingError,
    MissingOperandError,
    SweepCancelledError,
)
from data_import_utility.infrastructure.logging import ConsoleLogger
from data_import_utility.mapping import (
    CancellationToken,
    FieldMapping,
    apply_all_row,
    apply_all_table,
    results_to_frame,
    rows_from_frame,
    sweep_table,
)
from data_import_utility.rules import (
    CombineFieldsRule,
    ConstantValueRule,
    CopyRule,
    CustomFieldlessRule,
    FieldAccessRule,
    IgnoreRule,
)
from data_import_utility.transformations import (
    CalculateTransformation,
    ConditionalTransformation,
    FieldTransformation,
)


def _mappings() -> list[FieldMapping]:
    return [
        FieldMapping("Name", str, CopyRule.for_field("name")),
        FieldMapping("Skipped", str, IgnoreRule()),
        FieldMapping("Age", int, CopyRule.for_field("age")),
        FieldMapping("Label", str, CombineFieldsRule("${0} (${1})", [
            FieldTransformation("name"),
            FieldTransformation("age"),
        ])),
    ]


def _rows() -> list[dict[str, object]]:
    return [{"name": f"P{i}", "age": str(20 + i)} for i in range(12)]


def _logger(verbosity: int = 1) -> tuple[ConsoleLogger, StringIO]:
    output = StringIO()
    console = Console(file=output, no_color=True, highlight=False, width=200)
    return ConsoleLogger(console, verbosity), output


def _misconfigured() -> FieldMapping:
    """A mapping whose conditional has no false branch."""
    conditional = ConditionalTransformation(
        EqualsOperation(FieldAccessRule("name"), ConstantValueRule("P0")),
        ConstantValueRule("first"),
    )
    return FieldMapping(
        "Flag", str, CustomFieldlessRule("x", value_transformations=[conditional])
    )


class TestApplyAllRow:
    def test_evaluates_active_mappings(self):
        results = asyncio.run(apply_all_row(_mappings(), {"name": "Ann", "age": "30"}))

        assert list(results) == ["Name", "Age", "Label"]
        assert results["Age"].current_value == 30
        assert results["Label"].current_value == "Ann (30)"

    def test_misconfigured_rule_raises(self):
        with pytest.raises(MissingOperandError):
            asyncio.run(apply_all_row([_misconfigured()], {"name": "P0"}))


class TestApplyAllTable:
    """Tests for sweeping a whole table."""

    def test_output_keeps_row_and_column_order(self):
        """Rows keep input order and columns follow mapping order."""
        config = EngineConfig(max_concurrent_rows=3)

        output = asyncio.run(apply_all_table(_mappings(), _rows(), config=config))

        assert [row["Name"] for row in output] == [f"P{i}" for i in range(12)]
        assert list(output[0]) == ["Name", "Age", "Label"]
        assert output[11] == {"Name": "P11", "Age": 31, "Label": "P11 (31)"}

    def test_empty_table(self):
        assert asyncio.run(apply_all_table(_mappings(), [])) == []

    def test_missing_source_field_raises(self):
        mappings = [FieldMapping("X", str, CopyRule.for_field("nope"))]

        with pytest.raises(MissingFieldMappingError) as exc_info:
            asyncio.run(apply_all_table(mappings, _rows()))

        assert exc_info.value.missing_fields == ["nope"]
        assert "nope" in str(exc_info.value)

    def test_ignored_mapping_source_is_not_required(self):
        """Source fields of ignored mappings need not exist."""
        mappings = [
            FieldMapping("Name", str, CopyRule.for_field("name")),
            FieldMapping("X", str, IgnoreRule()),
        ]

        assert asyncio.run(apply_all_table(mappings, _rows()[:1])) == [{"Name": "P0"}]

    def test_explicit_columns_are_checked(self):
        with pytest.raises(MissingFieldMappingError):
            asyncio.run(apply_all_table(_mappings(), [], columns=["name"]))

    def test_failed_cells_become_null(self):
        rows = [{"name": "A", "age": "x"}, {"name": "B", "age": "7"}]
        logger, output = _logger()

        result = asyncio.run(apply_all_table(_mappings(), rows, logger=logger))

        assert result[0]["Age"] is None
        assert result[1]["Age"] == 7
        assert logger.get_stats()["failed_cells"] == 1
        text = output.getvalue()
        assert "Row 0, Age: Cannot convert 'x' to int." in text
        assert "Processed 2 rows with 1 failed cells" in text

    def test_bad_formula_cell_does_not_abort_sweep(self):
        mappings = [
            FieldMapping(
                "Total",
                str,
                CopyRule.for_field("amount", CalculateTransformation("${0} + 1", 0)),
            )
        ]
        rows = [{"amount": "5"}, {"amount": "-" * 3000 + "1"}, {"amount": "7"}]

        swept = asyncio.run(sweep_table(mappings, rows))

        assert [row["Total"].current_value for row in swept] == ["6", None, "8"]
        assert swept[1]["Total"].error_message == Messages.INVALID_CALCULATION

    def test_misconfigured_rule_fails_its_cells_only(self):
        """A misconfigured rule fails its cells and the sweep goes on."""
        mappings = [FieldMapping("Name", str, CopyRule.for_field("name")), _misconfigured()]

        swept = asyncio.run(sweep_table(mappings, _rows()[:2]))

        assert [row["Name"].current_value for row in swept] == ["P0", "P1"]
        for row in swept:
            flag = row["Flag"]
            assert flag.was_failure
            assert flag.error_message.startswith(
                Messages.RULE_MISCONFIGURED.format(field="Flag", detail="")
            )

    def test_cancellation(self):
        token = CancellationToken()
        token.cancel()
        logger, output = _logger()

        with pytest.raises(SweepCancelledError):
            asyncio.run(
                apply_all_table(_mappings(), _rows(), logger=logger, cancellation_token=token)
            )

        assert token.is_cancelled
        assert "Sweep cancelled" in output.getvalue()

    def test_success_is_logged(self):
        logger, output = _logger()

        asyncio.run(apply_all_table(_mappings(), _rows(), logger=logger))

        text = output.getvalue()
        assert "Applying 3 field mappings to 12 rows" in text
        assert "Processed 12 rows" in text
        assert logger.get_stats()["rows_processed"] == 12


class TestFrames:
    def test_rows_from_frame_turns_missing_into_none(self, people_frame):
        rows = rows_from_frame(people_frame)

        assert rows[0]["First Name"] == "Ann"
        assert rows[2]["AGE"] is None

    def test_results_to_frame(self):
        output = asyncio.run(apply_all_table(_mappings(), _rows()[:2]))

        frame = results_to_frame(_mappings(), output)

        assert list(frame.columns) == ["Name", "Age", "Label"]
        assert len(frame) == 2

    def test_frame_end_to_end(self, people_frame):
        mappings = [
            FieldMapping("Name", str, CopyRule.for_field("First Name")),
            FieldMapping("Age", int, CopyRule.for_field("AGE")),
        ]

        output = asyncio.run(
            apply_all_table(mappings, rows_from_frame(people_frame), columns=people_frame.columns)
        )

        assert output[1] == {"Name": "Bob", "Age": 41}
        assert output[2]["Age"] is None
        assert isinstance(results_to_frame(mappings, output), pd.DataFrame)
