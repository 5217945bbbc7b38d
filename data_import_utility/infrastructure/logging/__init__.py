"""Logging adapters implementing ``LoggerPort``."""

from .console_logger import ConsoleLogger, LogContext, LogLevel
from .null_logger import NullLogger

__all__ = [
    "ConsoleLogger",
    "LogContext",
    "LogLevel",
    "NullLogger",
]
