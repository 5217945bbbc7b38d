from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import override

from rich.console import Console
from rich.markup import escape

from ...application.ports.services import LoggerPort


class LogLevel(IntEnum):
    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2


@dataclass(slots=True)
class LogContext:
    table_name: str = ""
    field_name: str = ""
    operation: str = ""
    start_time: datetime = field(default_factory=datetime.now)

    def elapsed_ms(self) -> float:
        return (datetime.now() - self.start_time).total_seconds() * 1000


def _empty_stats() -> dict[str, int]:
    return {
        "files_loaded": 0,
        "rows_processed": 0,
        "failed_cells": 0,
        "warnings": 0,
        "errors": 0,
    }


class ConsoleLogger(LoggerPort):
    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        super().__init__()
        self.console = console or Console()
        self.verbosity = verbosity
        self._context: LogContext | None = None
        self._stats: dict[str, int] = _empty_stats()

    def set_context(self, **kwargs: str) -> None:
        if self._context is None:
            self._context = LogContext()
        for key, value in kwargs.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

    def clear_context(self) -> None:
        self._context = None

    @override
    def info(self, message: str, *, level: int = LogLevel.NORMAL) -> None:
        if self.verbosity >= level:
            prefix = self._get_prefix()
            self.console.print(f"{prefix}{message}")

    @override
    def verbose(self, message: str) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            prefix = self._get_prefix()
            self.console.print(f"[dim]{prefix}{message}[/dim]")

    @override
    def debug(self, message: str) -> None:
        if self.verbosity >= LogLevel.DEBUG:
            prefix = self._get_prefix()
            self.console.print(f"[dim cyan]{prefix}{message}[/dim cyan]")

    @override
    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    @override
    def warning(self, message: str) -> None:
        self._stats["warnings"] += 1
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    @override
    def error(self, message: str) -> None:
        self._stats["errors"] += 1
        self.console.print(f"[red]✗[/red] {message}")

    @override
    def log_file_loaded(
        self, filename: str, row_count: int, column_count: int | None = None
    ) -> None:
        self._stats["files_loaded"] += 1
        self.set_context(table_name=filename)
        msg = f"Loaded {row_count:,} rows from {filename}"
        if column_count is not None and self.verbosity >= LogLevel.DEBUG:
            msg += f" ({column_count} columns)"
        self.verbose(msg)

    @override
    def log_sweep_start(self, row_count: int, field_count: int) -> None:
        self.set_context(operation="sweep")
        self.verbose(f"Applying {field_count} field mappings to {row_count:,} rows")

    @override
    def log_sweep_complete(
        self, row_count: int, failed_cells: int, *, cancelled: bool = False
    ) -> None:
        self._stats["rows_processed"] += row_count
        if cancelled:
            self.warning(f"Sweep cancelled after {row_count:,} rows")
            return
        if failed_cells:
            self.warning(f"Processed {row_count:,} rows with {failed_cells:,} failed cells")
        else:
            self.success(f"Processed {row_count:,} rows")

    @override
    def log_cell_failure(self, row_index: int, field_name: str, message: str) -> None:
        self._stats["failed_cells"] += 1
        self.verbose(escape(f"  Row {row_index}, {field_name}: {message}"))

    def log_final_stats(self) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            self.console.print()
            self.console.print("[dim]Import Statistics:[/dim]")
            self.console.print(f"[dim]  Files loaded: {self._stats['files_loaded']}[/dim]")
            self.console.print(
                f"[dim]  Rows processed: {self._stats['rows_processed']:,}[/dim]"
            )
            if self._stats["failed_cells"] > 0:
                self.console.print(
                    f"[dim yellow]  Failed cells: {self._stats['failed_cells']:,}[/dim yellow]"
                )
            if self._stats["errors"] > 0:
                self.console.print(
                    f"[dim red]  Errors: {self._stats['errors']}[/dim red]"
                )

    def get_stats(self) -> dict[str, int]:
        return self._stats.copy()

    def reset_stats(self) -> None:
        self._stats = _empty_stats()

    def _get_prefix(self) -> str:
        if self._context is None or self.verbosity < LogLevel.DEBUG:
            return ""
        parts = [
            part
            for part in (self._context.table_name, self._context.field_name)
            if part
        ]
        return escape(f"[{':'.join(parts)}] ") if parts else ""
