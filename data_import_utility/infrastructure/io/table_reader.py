from dataclasses import dataclass
from pathlib import Path
from typing import Any
from zipfile import BadZipFile

from openpyxl.utils.exceptions import InvalidFileException
import pandas as pd

from .exceptions import DataParseError, DataSourceNotFoundError

EXCEL_SUFFIXES = frozenset({".xlsx", ".xlsm"})


@dataclass(slots=True)
class TableReadOptions:
    normalize_headers: bool = True
    strict_na_handling: bool = True
    dtype: Any = str
    encoding: str = "utf-8"
    sheet_name: str | int = 0


def _check_path(path: Path) -> None:
    if not path.exists():
        raise DataSourceNotFoundError(f"File not found: {path}")
    if not path.is_file():
        raise DataSourceNotFoundError(f"Not a file: {path}")


def _normalize_headers(df: pd.DataFrame) -> pd.DataFrame:
    df.columns = [str(col).strip() for col in df.columns]
    return df


class CSVReader:
    def read(self, path: Path, options: TableReadOptions | None = None) -> pd.DataFrame:
        if options is None:
            options = TableReadOptions()
        _check_path(path)
        try:
            df = pd.read_csv(
                path,
                dtype=options.dtype,
                keep_default_na=not options.strict_na_handling,
                na_values=[""] if options.strict_na_handling else None,
                encoding=options.encoding,
            )
        except FileNotFoundError as e:
            raise DataSourceNotFoundError(f"File not found: {path}") from e
        except pd.errors.ParserError as e:
            raise DataParseError(f"Failed to parse CSV {path}: {e}") from e
        except pd.errors.EmptyDataError as e:
            raise DataParseError(f"CSV file is empty: {path}") from e
        except UnicodeDecodeError as e:
            raise DataParseError(
                f"Encoding error reading {path}. Try a different encoding: {e}"
            ) from e
        if df.shape[1] == 0:
            raise DataParseError(f"CSV file has no columns: {path}")
        if options.normalize_headers:
            df = _normalize_headers(df)
        return df


class ExcelReader:
    def read(self, path: Path, options: TableReadOptions | None = None) -> pd.DataFrame:
        if options is None:
            options = TableReadOptions()
        _check_path(path)
        try:
            df = pd.read_excel(
                path,
                sheet_name=options.sheet_name,
                dtype=options.dtype,
                keep_default_na=not options.strict_na_handling,
                na_values=[""] if options.strict_na_handling else None,
                engine="openpyxl",
            )
        except FileNotFoundError as e:
            raise DataSourceNotFoundError(f"File not found: {path}") from e
        except (ValueError, KeyError, OSError, BadZipFile, InvalidFileException) as e:
            raise DataParseError(f"Failed to read workbook {path}: {e}") from e
        if df.shape[1] == 0:
            raise DataParseError(f"Worksheet has no columns: {path}")
        if options.normalize_headers:
            df = _normalize_headers(df)
        return df

    def sheet_names(self, path: Path) -> list[str]:
        _check_path(path)
        try:
            with pd.ExcelFile(path, engine="openpyxl") as workbook:
                return [str(name) for name in workbook.sheet_names]
        except (ValueError, OSError, BadZipFile, InvalidFileException) as e:
            raise DataParseError(f"Failed to read workbook {path}: {e}") from e


def sheet_for_table(path: Path, table_name: str | None) -> str | int:
    """Pick the worksheet named after the table, else the first worksheet.

    Sources that are not workbooks always use ``0``.
    """
    if path.suffix.lower() not in EXCEL_SUFFIXES or not table_name:
        return 0
    return table_name if table_name in ExcelReader().sheet_names(path) else 0


def load_table(path: Path, options: TableReadOptions | None = None) -> pd.DataFrame:
    """Read a CSV or Excel source table, chosen by file suffix."""
    if path.suffix.lower() in EXCEL_SUFFIXES:
        return ExcelReader().read(path, options)
    return CSVReader().read(path, options)
