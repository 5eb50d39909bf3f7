"""HTTP client for the drawing store's current-drawing endpoint."""

from __future__ import annotations

import logging
from pathlib import PurePosixPath

import httpx
from pydantic import BaseModel, ConfigDict, Field

from draw_it_mcp.errors import DrawingStoreUnavailable

logger = logging.getLogger(__name__)


class DrawingReference(BaseModel):
    """Current drawing as reported by GET /api/drawing."""

    model_config = ConfigDict(populate_by_name=True)

    file_path: str = Field(default="", alias="filePath")
    timestamp: int = 0  # ms since epoch
    width: int = 800
    height: int = 600

    @property
    def filename(self) -> str:
        """Basename of file_path ("" when no file is set)."""
        return PurePosixPath(self.file_path.replace("\\", "/")).name

    @property
    def has_file(self) -> bool:
        return bool(self.file_path)


class DrawingStoreClient:
    """Fetches drawing metadata from the drawing store.

    A new connection is made per call; nothing is cached because the drawing
    can change between calls.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def drawing_url(self) -> str:
        return f"{self.base_url}/api/drawing"

    async def fetch_current_drawing(self) -> DrawingReference:
        """Fetch the current drawing reference.

        Raises:
            DrawingStoreUnavailable: Store unreachable, non-2xx, or unparseable body.
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.drawing_url)
        except httpx.HTTPError as e:
            logger.warning(f"Drawing store unreachable at {self.drawing_url}: {e}")
            raise DrawingStoreUnavailable(None, f"Could not reach drawing store: {e}") from e

        if not response.is_success:
            logger.info(f"Drawing store returned {response.status_code}")
            raise DrawingStoreUnavailable(
                response.status_code, f"Drawing store returned HTTP {response.status_code}"
            )

        try:
            return DrawingReference.model_validate(response.json())
        except ValueError as e:
            raise DrawingStoreUnavailable(
                response.status_code, f"Invalid drawing metadata: {e}"
            ) from e
