"""Process-wide logger used by the library layers.

The library stays silent until a caller (usually the CLI) installs a real
logger with :func:`set_logger`.
"""

from ...application.ports.services import LoggerPort
from .null_logger import NullLogger

_logger: LoggerPort = NullLogger()


def get_logger() -> LoggerPort:
    return _logger


def set_logger(logger: LoggerPort | None) -> None:
    """Install ``logger`` globally; ``None`` restores the silent default."""
    global _logger
    _logger = logger if logger is not None else NullLogger()
