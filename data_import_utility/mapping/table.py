"""Applying field mappings to whole tables.

Rows are evaluated concurrently, bounded by ``EngineConfig.max_concurrent_rows``.
Within a row every non-ignored field mapping is evaluated; output rows keep
input order and columns follow field-mapping order.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Sequence
import threading
from typing import TYPE_CHECKING

import pandas as pd

from ..config import EngineConfig
from ..constants import Messages
from ..exceptions import ConfigurationError, MissingFieldMappingError, SweepCancelledError
from ..infrastructure.logging.null_logger import NullLogger
from ..transformations.base import TransformationResult

if TYPE_CHECKING:
    from ..application.ports.services import LoggerPort
    from ..transformations.base import Row
    from .field_mapping import FieldMapping


class CancellationToken:
    def __init__(self) -> None:
        super().__init__()
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise SweepCancelledError("The table sweep was cancelled.")


def rows_from_frame(frame: pd.DataFrame) -> list[dict[str, object]]:
    """Convert a frame into row mappings, turning missing values into ``None``."""
    cleaned = frame.astype(object).where(pd.notna(frame), None)
    return [
        {str(key): value for key, value in record.items()}
        for record in cleaned.to_dict(orient="records")
    ]


def active_mappings(mappings: Iterable[FieldMapping]) -> list[FieldMapping]:
    return [mapping for mapping in mappings if not mapping.ignore_mapping]


def missing_source_fields(
    mappings: Iterable[FieldMapping], columns: Iterable[str]
) -> list[str]:
    available = set(columns)
    missing: list[str] = []
    for mapping in active_mappings(mappings):
        for name in mapping.source_field_names:
            if name not in available and name not in missing:
                missing.append(name)
    return missing


async def apply_all_row(
    mappings: Sequence[FieldMapping], row: Row
) -> dict[str, TransformationResult]:
    """Evaluate every non-ignored mapping against one row."""
    active = active_mappings(mappings)
    results = await asyncio.gather(*(mapping.apply(row) for mapping in active))
    return {
        mapping.field_name: result
        for mapping, result in zip(active, results, strict=True)
    }


async def _apply_cell(mapping: FieldMapping, row: Row) -> TransformationResult:
    try:
        return await mapping.apply(row)
    except ConfigurationError as e:
        return TransformationResult.failure(
            None,
            mapping.field_type,
            Messages.RULE_MISCONFIGURED.format(field=mapping.field_name, detail=e),
            record=row,
        )


async def sweep_table(
    mappings: Sequence[FieldMapping],
    rows: Iterable[Row],
    *,
    columns: Iterable[str] | None = None,
    config: EngineConfig | None = None,
    logger: LoggerPort | None = None,
    cancellation_token: CancellationToken | None = None,
) -> list[dict[str, TransformationResult]]:
    """Evaluate the mappings over every row and keep the full results.

    A misconfigured rule fails its cells with a message naming the field; the
    rest of the table is still evaluated.

    Raises:
        MissingFieldMappingError: If the table lacks a mapped source field.
        SweepCancelledError: If ``cancellation_token`` is cancelled mid-sweep.
    """
    config = config or EngineConfig()
    logger = logger or NullLogger()
    token = cancellation_token or CancellationToken()
    rows = list(rows)
    active = active_mappings(mappings)
    if columns is None and rows:
        columns = rows[0].keys()
    if columns is not None and (missing := missing_source_fields(active, columns)):
        raise MissingFieldMappingError(missing)

    logger.log_sweep_start(len(rows), len(active))
    semaphore = asyncio.Semaphore(config.max_concurrent_rows)

    async def _apply_row(row: Row) -> dict[str, TransformationResult]:
        async with semaphore:
            token.raise_if_cancelled()
            results = await asyncio.gather(
                *(_apply_cell(mapping, row) for mapping in active)
            )
            return {
                mapping.field_name: result
                for mapping, result in zip(active, results, strict=True)
            }

    try:
        swept = list(await asyncio.gather(*(_apply_row(row) for row in rows)))
    except SweepCancelledError:
        logger.log_sweep_complete(0, 0, cancelled=True)
        raise

    failed_cells = 0
    for index, row_results in enumerate(swept):
        for field_name, result in row_results.items():
            if result.was_failure:
                failed_cells += 1
                logger.log_cell_failure(index, field_name, result.error_message or "")
    logger.log_sweep_complete(len(swept), failed_cells)
    return swept


async def apply_all_table(
    mappings: Sequence[FieldMapping],
    rows: Iterable[Row],
    *,
    columns: Iterable[str] | None = None,
    config: EngineConfig | None = None,
    logger: LoggerPort | None = None,
    cancellation_token: CancellationToken | None = None,
) -> list[dict[str, object]]:
    """Produce one output row per input row holding the mapped values.

    Failed cells are written as ``None`` and reported through ``logger``.
    """
    swept = await sweep_table(
        mappings,
        rows,
        columns=columns,
        config=config,
        logger=logger,
        cancellation_token=cancellation_token,
    )
    return [
        {name: result.current_value for name, result in row_results.items()}
        for row_results in swept
    ]


def results_to_frame(
    mappings: Sequence[FieldMapping], rows: Sequence[dict[str, object]]
) -> pd.DataFrame:
    return pd.DataFrame(
        list(rows), columns=[m.field_name for m in active_mappings(mappings)]
    )
