"""Logger setup for the command line front end."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..infrastructure.logging import ConsoleLogger, LogContext, LogLevel, get_logger, set_logger

if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "ConsoleLogger",
    "LogContext",
    "LogLevel",
    "create_logger",
    "get_logger",
    "set_logger",
]


def create_logger(console: Console | None = None, verbosity: int = 0) -> ConsoleLogger:
    """Create a console logger and install it as the process-wide logger."""
    logger = ConsoleLogger(console, verbosity)
    set_logger(logger)
    return logger
