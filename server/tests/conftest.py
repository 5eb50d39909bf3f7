"""Shared fixtures for draw-it-mcp tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from draw_it_mcp.config import Settings
from draw_it_mcp.errors import DrawingStoreUnavailable
from draw_it_mcp.events import RecordingEventSink
from draw_it_mcp.store_client import DrawingReference
from draw_it_mcp.tools import ToolContext, set_tool_context

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)


def make_drawing(
    path: Path,
    size: tuple[int, int] = (800, 600),
    background: tuple[int, ...] = WHITE,
    box: tuple[int, int, int, int] | None = None,
    fill: tuple[int, ...] = BLACK,
    mode: str = "RGB",
) -> Path:
    """Write a PNG with a flat background and an optional solid box (l, t, r, b)."""
    img = Image.new(mode, size, background)
    if box is not None:
        left, top, right, bottom = box
        img.paste(Image.new(mode, (right - left, bottom - top), fill), (left, top))
    img.save(path, format="PNG")
    return path


def make_quadrants(path: Path, size: int = 500) -> Path:
    """Square PNG whose four quadrants are different colours (content fills the frame)."""
    half = size // 2
    img = Image.new("RGB", (size, size))
    img.paste((255, 0, 0), (0, 0, half, half))
    img.paste((0, 255, 0), (half, 0, size, half))
    img.paste((0, 0, 255), (0, half, half, size))
    img.paste((255, 255, 0), (half, half, size, size))
    img.save(path, format="PNG")
    return path


class FakeDrawingStore:
    """Stands in for DrawingStoreClient."""

    def __init__(
        self,
        reference: DrawingReference | None = None,
        error: DrawingStoreUnavailable | None = None,
        base_url: str = "http://localhost:3001",
    ) -> None:
        self.reference = reference
        self.error = error
        self.base_url = base_url
        self.calls = 0

    async def fetch_current_drawing(self) -> DrawingReference:
        self.calls += 1
        if self.error is not None:
            raise self.error
        assert self.reference is not None
        return self.reference


@pytest.fixture
def drawings_dir(tmp_path: Path) -> Path:
    """Empty drawings directory."""
    directory = tmp_path / "public" / "drawings"
    directory.mkdir(parents=True)
    return directory


@pytest.fixture
def test_settings(drawings_dir: Path, tmp_path: Path) -> Settings:
    return Settings(
        drawings_dir=drawings_dir,
        store_url="http://localhost:3001",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def sink() -> RecordingEventSink:
    return RecordingEventSink()


@pytest.fixture
def current_reference() -> DrawingReference:
    return DrawingReference(file_path="/drawings/current-active.png", timestamp=1700000000000)


@pytest.fixture
def fake_store(current_reference: DrawingReference) -> FakeDrawingStore:
    return FakeDrawingStore(reference=current_reference)


@pytest.fixture
def tool_context(
    test_settings: Settings, fake_store: FakeDrawingStore, sink: RecordingEventSink
):
    """ToolContext wired to the fake store, recording sink and temp drawings dir."""
    context = ToolContext(settings=test_settings, store=fake_store, event_sink=sink)  # type: ignore[arg-type]
    set_tool_context(context)
    yield context
    set_tool_context(None)
