from .exceptions import (
    DataImportInfrastructureError,
    DataParseError,
    DataSourceError,
    DataSourceNotFoundError,
)
from .table_reader import (
    CSVReader,
    ExcelReader,
    TableReadOptions,
    load_table,
    sheet_for_table,
)

__all__ = [
    "CSVReader",
    "DataImportInfrastructureError",
    "DataParseError",
    "DataSourceError",
    "DataSourceNotFoundError",
    "ExcelReader",
    "TableReadOptions",
    "load_table",
    "sheet_for_table",
]
