"""Locate the drawings directory on disk.

The MCP server and the drawing store may be started from different working
directories, so several layouts are probed in order. The locator never fails:
when no candidate exists it returns the first one so callers still get a
stable path to report. Whether an image is actually there is the caller's
concern.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

from draw_it_mcp.config import Settings
from draw_it_mcp.config import settings as default_settings
from draw_it_mcp.events import EventSink, default_sink
from draw_it_mcp.store_client import DrawingReference

# Project root when running from a checkout: server/draw_it_mcp/ -> repo root
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

CandidateFn = Callable[[Settings], Path | None]


def _configured_dir(settings: Settings) -> Path | None:
    return Path(settings.drawings_dir) if settings.drawings_dir else None


def _install_relative(_settings: Settings) -> Path:
    return PROJECT_ROOT / "public" / "drawings"


def _cwd_relative(_settings: Settings) -> Path:
    return Path(os.getcwd()) / "public" / "drawings"


def _cwd_src_sibling(_settings: Settings) -> Path:
    return Path(os.getcwd()) / "src" / ".." / "public" / "drawings"


CANDIDATES: list[CandidateFn] = [
    _configured_dir,
    _install_relative,
    _cwd_relative,
    _cwd_src_sibling,
]


def candidate_directories(settings: Settings | None = None) -> list[Path]:
    """Resolved candidate directories in probe order (duplicates kept)."""
    settings = settings or default_settings
    paths = [fn(settings) for fn in CANDIDATES]
    return [p.resolve() for p in paths if p is not None]


def resolve_drawings_directory(
    settings: Settings | None = None,
    event_sink: EventSink | None = None,
) -> Path:
    """Return the first existing candidate, else the first candidate."""
    sink = event_sink or default_sink(__name__)
    candidates = candidate_directories(settings)

    for path in candidates:
        sink.log_event(logging.DEBUG, "Checking drawings path", path=str(path))
        if path.is_dir():
            sink.log_event(logging.INFO, "Found drawings directory", path=str(path))
            return path

    fallback = candidates[0]
    sink.log_event(
        logging.WARNING,
        "No drawings directory found, using fallback",
        path=str(fallback),
        candidates=[str(p) for p in candidates],
    )
    return fallback


def resolve_drawing_path(
    reference: DrawingReference,
    directory: Path,
    default_filename: str = "current-active.png",
) -> Path:
    """Path of the referenced image inside directory (basename only)."""
    return directory / (reference.filename or default_filename)
