"""Drawing store endpoints consumed by the canvas app and the MCP server."""

import base64
import binascii
import logging
import re
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ConfigDict, Field

from draw_it_mcp.persistence import read_bytes

from .state import DEFAULT_HEIGHT, DEFAULT_WIDTH, DrawingStore

logger = logging.getLogger(__name__)

router = APIRouter()

_DATA_URL_PREFIX = re.compile(r"^data:image/[a-z]+;base64,")


def get_drawing_store(request: Request) -> DrawingStore:
    return request.app.state.drawing_store


StoreDep = Annotated[DrawingStore, Depends(get_drawing_store)]


class SaveDrawingRequest(BaseModel):
    """Body of POST /api/drawing."""

    model_config = ConfigDict(populate_by_name=True)

    data_url: str = Field(default="", alias="dataURL")
    filename: str = "current-active.png"
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT


def data_url_to_png(data_url: str) -> bytes:
    """Decode the base64 payload of a data:image/... URL.

    Raises:
        ValueError: If the payload is not valid base64.
    """
    try:
        return base64.b64decode(_DATA_URL_PREFIX.sub("", data_url), validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 image data: {e}") from e


def _failure(status_code: int, error: str) -> JSONResponse:
    return JSONResponse({"success": False, "error": error}, status_code=status_code)


@router.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/api/drawing")
async def get_current_drawing(store: StoreDep) -> dict[str, Any]:
    """Current drawing info: {filePath, timestamp, width, height}."""
    current = await store.load_current()
    logger.debug(f"GET current drawing: {current.file_path or '(none)'}")
    return current.model_dump(by_alias=True)


@router.post("/api/drawing", response_model=None)
async def save_drawing(body: SaveDrawingRequest, store: StoreDep) -> dict[str, Any] | JSONResponse:
    """Store a drawing sent by the canvas as a data URL."""
    if not body.data_url.startswith("data:image/"):
        logger.error("Invalid image data received")
        return _failure(400, "Invalid image data")

    try:
        png_bytes = data_url_to_png(body.data_url)
    except ValueError as e:
        logger.error(str(e))
        return _failure(400, "Invalid image data")

    logger.info(
        f"Saving {body.filename}",
        extra={"data_url_length": len(body.data_url), "width": body.width, "height": body.height},
    )

    try:
        info = await store.save(body.filename, png_bytes, body.width, body.height)
    except ValueError as e:
        return _failure(400, str(e))
    except OSError as e:
        logger.exception(f"Error saving drawing: {e}")
        return _failure(500, "Failed to save drawing")

    return {
        "success": True,
        "filePath": info.file_path,
        "timestamp": info.timestamp,
        "filename": body.filename,
    }


@router.get("/api/drawing/png")
async def get_current_drawing_png(store: StoreDep) -> Response:
    """Current drawing as a PNG file."""
    path = await store.current_file()
    if path is None:
        raise HTTPException(status_code=404, detail="No current drawing found")

    current = store.current
    png_bytes = await read_bytes(path)
    return Response(
        content=png_bytes,
        media_type="image/png",
        headers={
            "Cache-Control": "no-cache, no-store, must-revalidate",
            "X-Drawing-Timestamp": str(current.timestamp),
            "X-Drawing-Dimensions": f"{current.width}x{current.height}",
        },
    )
