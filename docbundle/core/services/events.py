"""
Build events — the line-oriented reporting channel.

Services report progress and warnings through a ``Reporter``.  The
reporter keeps every event in order (for ``--json`` output and tests)
and forwards each one to an optional callback as it happens (the CLI
prints them).

Event message standard::

    {"level": "info" | "warning", "message": "..."}
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Literal

logger = logging.getLogger(__name__)

Level = Literal["info", "warning"]


@dataclass(frozen=True)
class BuildEvent:
    """One progress line."""

    level: Level
    message: str

    def to_dict(self) -> dict:
        return {"level": self.level, "message": self.message}


EventCallback = Callable[[BuildEvent], None]


@dataclass
class Reporter:
    """Ordered collector of build events."""

    on_event: EventCallback | None = None
    events: list[BuildEvent] = field(default_factory=list)

    def info(self, message: str) -> None:
        self._emit(BuildEvent("info", message))

    def warning(self, message: str) -> None:
        self._emit(BuildEvent("warning", message))

    @property
    def warnings(self) -> list[str]:
        return [e.message for e in self.events if e.level == "warning"]

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self.events if e.level == "info"]

    def _emit(self, event: BuildEvent) -> None:
        self.events.append(event)
        logger.debug("[%s] %s", event.level, event.message)
        if self.on_event:
            self.on_event(event)
