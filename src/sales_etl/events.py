"""
Run observers.

The orchestrator reports progress and failures as leveled `RunEvent`s.
Observers are write-only sinks: nothing they do feeds back into a run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Protocol

from rich.console import Console
from rich.markup import escape
from rich.traceback import Traceback


class EventLevel(Enum):
    """Severity of a run event."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    @classmethod
    def parse(cls, value: str | EventLevel) -> EventLevel:
        if isinstance(value, cls):
            return value
        return cls[value.upper()]


@dataclass
class RunEvent:
    """A single structured progress or error event."""

    level: EventLevel
    message: str
    context: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def error(self) -> BaseException | None:
        err = self.context.get("error")
        return err if isinstance(err, BaseException) else None


class Observer(Protocol):
    """Anything that accepts run events."""

    def emit(self, event: RunEvent) -> None: ...


class MemoryObserver:
    """Keep every event in arrival order."""

    def __init__(self):
        self.events: list[RunEvent] = []

    def emit(self, event: RunEvent) -> None:
        self.events.append(event)

    def at_level(self, level: EventLevel) -> list[RunEvent]:
        return [e for e in self.events if e.level is level]

    def messages(self, level: EventLevel | None = None) -> list[str]:
        return [e.message for e in self.events if level is None or e.level is level]


class ConsoleObserver:
    """Render events on a rich console, filtered by a minimum level."""

    _TAGS = {
        EventLevel.DEBUG: "[dim]\\[debug][/]",
        EventLevel.INFO: "[cyan]\\[info][/]",
        EventLevel.WARNING: "[yellow]\\[warn][/]",
        EventLevel.ERROR: "[red]\\[error][/]",
    }

    def __init__(self, level: str | EventLevel = "INFO", console: Console | None = None):
        self.level = EventLevel.parse(level)
        self.console = console or Console(stderr=True)

    def emit(self, event: RunEvent) -> None:
        if event.level.value < self.level.value:
            return

        fields = " ".join(
            escape(f"{key}={value}") for key, value in event.context.items() if key != "error"
        )
        line = f"{self._TAGS[event.level]} {escape(event.message)}"
        if fields:
            line += f" [dim]{fields}[/]"
        self.console.print(line)

        err = event.error
        if err is not None:
            self.console.print(f"  [red]{escape(f'{type(err).__name__}: {err}')}[/]")
            if event.level is EventLevel.ERROR and err.__traceback__ is not None:
                self.console.print(Traceback.from_exception(type(err), err, err.__traceback__))
