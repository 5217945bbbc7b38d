"""Apply command - run a mapping definition over a source table.

Thin adapter between click and the mapping layer: it loads the source file
and the mapping document, sweeps the table, and writes or prints the output.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from ...config import ConfigLoader
from ...exceptions import DataImportError
from ...infrastructure.io import (
    DataSourceError,
    TableReadOptions,
    load_table,
    sheet_for_table,
)
from ...mapping import (
    apply_all_table,
    load_mapping_definition,
    results_to_frame,
    rows_from_frame,
)
from ..logging_config import create_logger

console = Console()

PREVIEW_ROWS = 20


@click.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("mappings", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--table",
    "table_name",
    help=(
        "Table definition to apply (default: the first one in the document). "
        "For workbooks, the worksheet of the same name is read when present."
    ),
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the output table to this CSV file (default: print a preview)",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a data_import_utility.toml config file",
)
@click.option(
    "-v", "--verbose", count=True, help="Increase verbosity level (e.g., -v, -vv)"
)
def apply_command(
    source: Path,
    mappings: Path,
    table_name: str | None,
    output: Path | None,
    config_file: Path | None,
    verbose: int,
) -> None:
    """Apply the field mappings in MAPPINGS to the rows of SOURCE.

    SOURCE may be a CSV or an Excel workbook. MAPPINGS is a JSON mapping
    definition.

    Examples:

    \b
        # Preview the mapped output
        data-import-utility apply people.csv mappings.json

    \b
        # Write the mapped output to a file
        data-import-utility apply people.xlsx mappings.json --output out.csv
    """
    logger = create_logger(console, verbose)
    config = ConfigLoader.load(config_file=config_file)
    try:
        table = load_mapping_definition(mappings).get_table(table_name)
        frame = load_table(
            source,
            TableReadOptions(
                normalize_headers=config.normalize_headers,
                strict_na_handling=config.strict_na_handling,
                encoding=config.csv_encoding,
                sheet_name=sheet_for_table(source, table.table_name),
            ),
        )
        logger.log_file_loaded(source.name, len(frame), len(frame.columns))
        rows = asyncio.run(
            apply_all_table(
                table.field_mappings,
                rows_from_frame(frame),
                columns=[str(column) for column in frame.columns],
                config=config,
                logger=logger,
            )
        )
    except (DataSourceError, DataImportError, KeyError) as e:
        logger.error(str(e))
        raise click.ClickException(str(e)) from e

    result = results_to_frame(table.field_mappings, rows)
    if output is not None:
        result.to_csv(output, index=False)
        logger.success(f"Wrote {len(result):,} rows to {output}")
    else:
        preview = Table(title=f"{table.table_name} (first {PREVIEW_ROWS} rows)")
        for column in result.columns:
            preview.add_column(str(column))
        for record in result.head(PREVIEW_ROWS).itertuples(index=False):
            preview.add_row(*("" if v is None else str(v) for v in record))
        console.print(preview)
    logger.log_final_stats()
