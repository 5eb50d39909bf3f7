"""Exception types raised by the retrieval pipeline."""

from __future__ import annotations


class DrawItError(Exception):
    """Base class for draw-it-mcp errors."""


class DrawingStoreUnavailable(DrawItError):
    """The drawing store could not be reached or reported a failure.

    Attributes:
        status: HTTP status code, or None when the store was unreachable
    """

    def __init__(self, status: int | None, detail: str = "") -> None:
        self.status = status
        self.detail = detail
        super().__init__(detail or f"Drawing store unavailable (status={self.status_label})")

    @property
    def status_label(self) -> str:
        """Status code as text, or 'unreachable' when no response came back."""
        return str(self.status) if self.status is not None else "unreachable"


class TrimError(DrawItError):
    """Background trimming could not produce a usable region."""


class UnknownToolError(DrawItError):
    """A tool invocation named a tool that is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class ResponseValidationError(DrawItError):
    """An outgoing response could not be serialized to JSON."""
