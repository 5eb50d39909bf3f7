"""Drawing store: the HTTP side of the canvas app.

Persists drawings posted by the canvas to the drawings directory and reports
the current drawing to the MCP server.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from draw_it_mcp.config import Settings
from draw_it_mcp.config import settings as default_settings
from draw_it_mcp.locator import resolve_drawings_directory

from .routes import router
from .state import DrawingStore, validate_filename


def create_app(settings: Settings | None = None, drawings_dir: Path | None = None) -> FastAPI:
    """Create the drawing store app.

    Args:
        settings: Settings to use (module settings by default)
        drawings_dir: Override the located drawings directory
    """
    settings = settings or default_settings
    directory = drawings_dir or resolve_drawings_directory(settings)

    app = FastAPI(title="draw-it-mcp drawing store")
    app.state.drawing_store = DrawingStore(directory, current_filename=settings.current_filename)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.include_router(router)
    return app


__all__ = ["DrawingStore", "create_app", "validate_filename"]
