"""Logging infrastructure.

This module provides logging adapters and the process-wide logger.
"""

from .console_logger import ConsoleLogger, LogContext, LogLevel
from .current import get_logger, set_logger
from .null_logger import NullLogger

__all__ = [
    "ConsoleLogger",
    "LogContext",
    "LogLevel",
    "NullLogger",
    "get_logger",
    "set_logger",
]
