"""Structured event sink used by the retrieval pipeline.

The pipeline records events through an injected sink instead of configuring
logging itself. The default sink forwards to the stdlib logging module, where
StructuredFormatter renders the fields under "extra".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

# LogRecord attributes that cannot be passed through `extra`
_RESERVED_KEYS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys() | {"message", "asctime"}
)


class EventSink(Protocol):
    """Anything that can record an event with a severity and structured fields."""

    def log_event(self, level: int, message: str, **fields: Any) -> None: ...


class LoggingEventSink:
    """Event sink backed by a stdlib logger."""

    def __init__(self, logger: logging.Logger | str = "draw_it_mcp") -> None:
        self.logger = logging.getLogger(logger) if isinstance(logger, str) else logger

    def log_event(self, level: int, message: str, **fields: Any) -> None:
        # exc_info=True attaches the exception currently being handled
        exc_info = bool(fields.pop("exc_info", False))
        extra = {(f"field_{k}" if k in _RESERVED_KEYS else k): v for k, v in fields.items()}
        self.logger.log(level, message, extra=extra, exc_info=exc_info)


@dataclass
class RecordedEvent:
    level: int
    message: str
    fields: dict[str, Any]


@dataclass
class RecordingEventSink:
    """In-memory sink; keeps every event for later inspection."""

    events: list[RecordedEvent] = field(default_factory=list)

    def log_event(self, level: int, message: str, **fields: Any) -> None:
        self.events.append(RecordedEvent(level, message, fields))

    def messages(self, level: int | None = None) -> list[str]:
        """Messages recorded, optionally only those at exactly `level`."""
        return [e.message for e in self.events if level is None or e.level == level]


def default_sink(name: str) -> EventSink:
    """Logging-backed sink for the given module logger name."""
    return LoggingEventSink(name)
