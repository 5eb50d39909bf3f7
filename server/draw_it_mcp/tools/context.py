"""Collaborators handed to tool handlers.

The server builds one ToolContext at startup. Tests pass their own context
(fake store, recording sink, temp drawings dir) straight to the handlers.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from draw_it_mcp.config import Settings
from draw_it_mcp.config import settings as default_settings
from draw_it_mcp.events import EventSink, LoggingEventSink
from draw_it_mcp.store_client import DrawingStoreClient


@dataclass
class ToolContext:
    """Settings, drawing store client and event sink for one server process."""

    settings: Settings
    store: DrawingStoreClient
    event_sink: EventSink = field(default_factory=lambda: LoggingEventSink("draw_it_mcp.tools"))

    @classmethod
    def from_settings(
        cls, settings: Settings | None = None, event_sink: EventSink | None = None
    ) -> ToolContext:
        settings = settings or default_settings
        store = DrawingStoreClient(settings.store_url, timeout=settings.store_timeout)
        if event_sink is None:
            return cls(settings=settings, store=store)
        return cls(settings=settings, store=store, event_sink=event_sink)


# Global context - set by the server on startup
_tool_context: ToolContext | None = None


def set_tool_context(context: ToolContext | None) -> None:
    """Set the context used when a handler is called without one."""
    global _tool_context
    _tool_context = context


def get_tool_context() -> ToolContext:
    """Get the current context, building a default one on first use."""
    global _tool_context
    if _tool_context is None:
        _tool_context = ToolContext.from_settings()
    return _tool_context
