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
    object_type: str = ""
    operation: str = ""
    start_time: datetime = field(default_factory=datetime.now)

    def elapsed_ms(self) -> float:
        return (datetime.now() - self.start_time).total_seconds() * 1000


class ConsoleLogger(LoggerPort):
    pass

    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        super().__init__()
        self.console = console or Console()
        self.verbosity = verbosity
        self._context: LogContext | None = None
        self._stats: dict[str, int] = {
            "objects_rendered": 0,
            "elements_rendered": 0,
            "warnings": 0,
            "errors": 0,
        }

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

    def log_object_rendered(
        self, object_type: str, element_count: int, output_format: str
    ) -> None:
        self._stats["objects_rendered"] += 1
        self._stats["elements_rendered"] += element_count
        self.verbose(
            f"Rendered {element_count} '{object_type}' element(s) as {output_format.upper()}"
        )

    def log_final_stats(self) -> None:
        if self.verbosity < LogLevel.VERBOSE:
            return
        stats = self._stats
        self.console.print()
        self.console.print("[bold]Statistics:[/bold]")
        self.console.print(f"  Objects rendered: {stats['objects_rendered']}")
        self.console.print(f"  Elements rendered: {stats['elements_rendered']}")
        if stats["warnings"]:
            self.console.print(f"  [yellow]Warnings: {stats['warnings']}[/yellow]")
        if stats["errors"]:
            self.console.print(f"  [red]Errors: {stats['errors']}[/red]")
        if self._context is not None and self.verbosity >= LogLevel.DEBUG:
            self.console.print(f"  Elapsed: {self._context.elapsed_ms():.1f} ms")

    def _get_prefix(self) -> str:
        if self._context is None or self.verbosity < LogLevel.DEBUG:
            return ""
        parts = [p for p in (self._context.object_type, self._context.operation) if p]
        if not parts:
            return ""
        return escape(f"[{':'.join(parts)}] ")
