from typing import override

from ...application.ports.services import LoggerPort


class NullLogger(LoggerPort):
    @override
    def info(self, message: str) -> None:
        return

    @override
    def success(self, message: str) -> None:
        return

    @override
    def warning(self, message: str) -> None:
        return

    @override
    def error(self, message: str) -> None:
        return

    @override
    def debug(self, message: str) -> None:
        return

    @override
    def verbose(self, message: str) -> None:
        return

    @override
    def log_file_loaded(
        self, filename: str, row_count: int, column_count: int | None = None
    ) -> None:
        return None

    @override
    def log_sweep_start(self, row_count: int, field_count: int) -> None:
        return None

    @override
    def log_sweep_complete(
        self, row_count: int, failed_cells: int, *, cancelled: bool = False
    ) -> None:
        return None

    @override
    def log_cell_failure(self, row_index: int, field_name: str, message: str) -> None:
        return None
