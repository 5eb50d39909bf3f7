"""Current-drawing state for the drawing store."""

from __future__ import annotations

import logging
import re
import time
from pathlib import Path

import aiofiles.os

from draw_it_mcp.persistence import atomic_write_bytes
from draw_it_mcp.store_client import DrawingReference

logger = logging.getLogger(__name__)

# Plain PNG file names only: no separators, no hidden files
FILENAME_PATTERN = re.compile(r"^[A-Za-z0-9_-][A-Za-z0-9._-]*\.png$")

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600


def _now_ms() -> int:
    return int(time.time() * 1000)


def validate_filename(filename: str) -> None:
    """Reject anything that is not a plain *.png file name.

    Raises:
        ValueError: If filename could escape the drawings directory.
    """
    if not FILENAME_PATTERN.match(filename):
        raise ValueError(f"Invalid filename: {filename!r}")


class DrawingStore:
    """Drawings directory plus the in-memory record of the current drawing.

    The current drawing is whatever was last saved as current_filename. After
    a restart it is recovered from that file's mtime on first read.
    """

    def __init__(self, drawings_dir: Path, current_filename: str = "current-active.png") -> None:
        self.drawings_dir = drawings_dir
        self.current_filename = current_filename
        self.current = DrawingReference(timestamp=_now_ms())

    def public_path(self, filename: str) -> str:
        """URL-style path reported to clients, e.g. /drawings/current-active.png."""
        return f"/drawings/{filename}"

    async def ensure_dir(self) -> None:
        await aiofiles.os.makedirs(self.drawings_dir, exist_ok=True)

    async def load_current(self) -> DrawingReference:
        """Return the current drawing, recovering it from disk if not yet known."""
        current_file = self.drawings_dir / self.current_filename
        if not self.current.has_file and await aiofiles.os.path.exists(current_file):
            try:
                stats = await aiofiles.os.stat(current_file)
            except OSError as e:
                logger.error(f"Failed to load current drawing from file: {e}")
                return self.current
            self.current = DrawingReference(
                timestamp=int(stats.st_mtime * 1000),
                width=DEFAULT_WIDTH,
                height=DEFAULT_HEIGHT,
                file_path=self.public_path(self.current_filename),
            )
            logger.debug("Loaded current drawing info from file")
        return self.current

    async def save(
        self,
        filename: str,
        data: bytes,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
    ) -> DrawingReference:
        """Write a drawing to disk; saving current_filename makes it current."""
        validate_filename(filename)
        await self.ensure_dir()
        await atomic_write_bytes(self.drawings_dir / filename, data)

        info = DrawingReference(
            timestamp=_now_ms(),
            width=width,
            height=height,
            file_path=self.public_path(filename),
        )
        if filename == self.current_filename:
            self.current = info
            logger.debug("Set as current drawing")
        return info

    async def current_file(self) -> Path | None:
        """Path of the current drawing on disk, or None if there is none."""
        reference = await self.load_current()
        if not reference.has_file:
            return None
        path = self.drawings_dir / reference.filename
        if not await aiofiles.os.path.exists(path):
            return None
        return path
