"""Unit tests for the source table readers."""

from pathlib import Path

import pandas as pd
import pytest

from data_import_utility.infrastructure.io import (
    CSVReader,
    DataParseError,
    DataSourceNotFoundError,
    ExcelReader,
    TableReadOptions,
    load_table,
    sheet_for_table,
)


class TestCSVReader:
    """Test suite for CSVReader class."""

    def test_read_simple_csv(self, tmp_path: Path):
        """Test reading a simple CSV file as text."""
        # Arrange
        csv_file = tmp_path / "test.csv"
        csv_file.write_text("Name,Age\nAnn,030\nBob,41\n")

        # Act
        df = CSVReader().read(csv_file)

        # Assert
        assert list(df.columns) == ["Name", "Age"]
        assert df.iloc[0, 1] == "030"

    def test_read_with_header_normalization(self, tmp_path: Path):
        """Test that headers are stripped of whitespace."""
        csv_file = tmp_path / "test.csv"
        csv_file.write_text(" Name , Age  \nAnn,30\n")

        df = CSVReader().read(csv_file)

        assert list(df.columns) == ["Name", "Age"]

    def test_read_without_header_normalization(self, tmp_path: Path):
        csv_file = tmp_path / "test.csv"
        csv_file.write_text(" Name ,Age\nAnn,30\n")

        df = CSVReader().read(csv_file, TableReadOptions(normalize_headers=False))

        assert " Name " in df.columns

    def test_strict_na_handling(self, tmp_path: Path):
        """Only empty cells are missing; 'NA' stays text."""
        # Arrange
        csv_file = tmp_path / "test.csv"
        csv_file.write_text("Code,Note\nNA,\nX,ok\n")

        # Act
        df = CSVReader().read(csv_file)

        # Assert
        assert df.iloc[0, 0] == "NA"
        assert pd.isna(df.iloc[0, 1])

    def test_lenient_na_handling(self, tmp_path: Path):
        csv_file = tmp_path / "test.csv"
        csv_file.write_text("Code,Note\nNA,x\n")

        df = CSVReader().read(csv_file, TableReadOptions(strict_na_handling=False))

        assert pd.isna(df.iloc[0, 0])

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(DataSourceNotFoundError, match="File not found"):
            CSVReader().read(tmp_path / "missing.csv")

    def test_directory_is_rejected(self, tmp_path: Path):
        with pytest.raises(DataSourceNotFoundError, match="Not a file"):
            CSVReader().read(tmp_path)

    def test_empty_file(self, tmp_path: Path):
        csv_file = tmp_path / "empty.csv"
        csv_file.write_text("")

        with pytest.raises(DataParseError, match="empty"):
            CSVReader().read(csv_file)

    def test_encoding_error(self, tmp_path: Path):
        csv_file = tmp_path / "latin.csv"
        csv_file.write_bytes("Name\nJos\xe9\n".encode("latin-1"))

        with pytest.raises(DataParseError, match="Encoding error"):
            CSVReader().read(csv_file)

        df = CSVReader().read(csv_file, TableReadOptions(encoding="latin-1"))
        assert df.iloc[0, 0] == "José"


class TestExcelReader:
    def test_read_workbook(self, tmp_path: Path):
        """Test reading the first worksheet of a workbook."""
        # Arrange
        workbook = tmp_path / "people.xlsx"
        pd.DataFrame({" Name ": ["Ann"], "Age": [30]}).to_excel(
            workbook, index=False, engine="openpyxl"
        )

        # Act
        df = ExcelReader().read(workbook)

        # Assert
        assert list(df.columns) == ["Name", "Age"]
        assert df.iloc[0, 1] == "30"

    def test_unknown_sheet(self, tmp_path: Path):
        workbook = tmp_path / "people.xlsx"
        pd.DataFrame({"Name": ["Ann"]}).to_excel(workbook, index=False, engine="openpyxl")

        with pytest.raises(DataParseError):
            ExcelReader().read(workbook, TableReadOptions(sheet_name="Nope"))

    def test_corrupt_workbook(self, tmp_path: Path):
        workbook = tmp_path / "broken.xlsx"
        workbook.write_text("not a workbook")

        with pytest.raises(DataParseError):
            ExcelReader().read(workbook)

    def test_sheet_names(self, tmp_path: Path):
        workbook = tmp_path / "book.xlsx"
        with pd.ExcelWriter(workbook, engine="openpyxl") as writer:
            pd.DataFrame({"A": [1]}).to_excel(writer, sheet_name="first", index=False)
            pd.DataFrame({"B": [2]}).to_excel(writer, sheet_name="people", index=False)

        assert ExcelReader().sheet_names(workbook) == ["first", "people"]
        assert sheet_for_table(workbook, "people") == "people"
        assert sheet_for_table(workbook, "missing") == 0
        assert sheet_for_table(workbook, None) == 0

    def test_sheet_for_csv_is_first(self, tmp_path: Path):
        csv_file = tmp_path / "people.csv"
        csv_file.write_text("A\n1\n")

        assert sheet_for_table(csv_file, "people") == 0


class TestLoadTable:
    def test_dispatches_on_suffix(self, tmp_path: Path):
        csv_file = tmp_path / "t.csv"
        csv_file.write_text("A\n1\n")
        workbook = tmp_path / "t.xlsx"
        pd.DataFrame({"B": [2]}).to_excel(workbook, index=False, engine="openpyxl")

        assert list(load_table(csv_file).columns) == ["A"]
        assert list(load_table(workbook).columns) == ["B"]
