from typing import Protocol, runtime_checkable


@runtime_checkable
class LoggerPort(Protocol):
    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def verbose(self, message: str) -> None: ...

    def log_file_loaded(
        self, filename: str, row_count: int, column_count: int | None = None
    ) -> None: ...

    def log_sweep_start(self, row_count: int, field_count: int) -> None: ...

    def log_sweep_complete(
        self, row_count: int, failed_cells: int, *, cancelled: bool = False
    ) -> None: ...

    def log_cell_failure(self, row_index: int, field_name: str, message: str) -> None: ...
