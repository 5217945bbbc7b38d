"""Process-wide logger used by the CLI."""

from __future__ import annotations

from rich.console import Console

from ..infrastructure.logging.console_logger import ConsoleLogger, LogContext, LogLevel

__all__ = [
    "ConsoleLogger",
    "LogContext",
    "LogLevel",
    "create_logger",
    "get_logger",
    "set_logger",
]


_logger: ConsoleLogger | None = None


def get_logger() -> ConsoleLogger:
    """Get the global logger instance, creating a default one on first use."""
    global _logger
    if _logger is None:
        _logger = ConsoleLogger()
    return _logger


def set_logger(logger: ConsoleLogger) -> None:
    global _logger
    _logger = logger


def create_logger(console: Console | None = None, verbosity: int = 0) -> ConsoleLogger:
    """Create and set a new logger instance.

    Args:
        console: Rich console for output
        verbosity: Verbosity level

    Returns:
        The new logger instance
    """
    logger = ConsoleLogger(console, verbosity)
    set_logger(logger)
    return logger
