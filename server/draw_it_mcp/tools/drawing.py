"""Drawing retrieval tools: get_drawing_png, get_drawing_base64."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any

import aiofiles.os

from draw_it_mcp.errors import DrawingStoreUnavailable
from draw_it_mcp.imaging import (
    encode_png_async,
    image_to_base64_async,
    resize_to_bound_async,
    smart_crop_async,
)
from draw_it_mcp.locator import resolve_drawing_path, resolve_drawings_directory
from draw_it_mcp.persistence import atomic_write_bytes

from .content import image_block, resource_block, text_block, text_response
from .context import ToolContext, get_tool_context


async def _locate_image(context: ToolContext) -> tuple[Path, Path] | dict[str, Any]:
    """Find the current drawing on disk.

    Returns:
        (image_path, drawings_dir), or a text-only response explaining why
        there is nothing to read
    """
    sink = context.event_sink

    try:
        reference = await context.store.fetch_current_drawing()
    except DrawingStoreUnavailable as e:
        sink.log_event(
            logging.INFO, "Drawing store not ready", status=e.status_label, error=str(e)
        )
        return text_response(
            f"No drawing data available. App status: {e.status_label}. "
            "Start the drawing app: draw-it-mcp store"
        )

    if not reference.has_file:
        return text_response(
            f"No drawing found. Please create a drawing at {context.store.base_url} first."
        )

    drawings_dir = resolve_drawings_directory(context.settings, sink)
    image_path = resolve_drawing_path(
        reference, drawings_dir, default_filename=context.settings.current_filename
    )
    exists = await aiofiles.os.path.exists(image_path)
    sink.log_event(
        logging.DEBUG,
        "Looking for image file",
        drawings_dir=str(drawings_dir),
        image_path=str(image_path),
        exists=exists,
    )

    if not exists:
        try:
            files = await aiofiles.os.listdir(drawings_dir)
            sink.log_event(logging.DEBUG, "Files in drawings directory", files=sorted(files))
        except OSError as e:
            sink.log_event(logging.ERROR, "Cannot read drawings directory", error=str(e))
        return text_response(
            f"Image file not found: {image_path}. Drawings directory: {drawings_dir}"
        )

    return image_path, drawings_dir


async def handle_get_drawing_png(context: ToolContext | None = None) -> dict[str, Any]:
    """Handle get_drawing_png tool call (file delivery).

    Crops and resizes the current drawing, writes it to the transfer artifact
    in the drawings directory and returns a file:// reference to it.

    Returns:
        Tool result with a summary text block and a resource block
    """
    context = context or get_tool_context()
    sink = context.event_sink
    settings = context.settings
    sink.log_event(logging.DEBUG, "get_drawing_png called")

    try:
        located = await _locate_image(context)
        if isinstance(located, dict):
            return located
        image_path, drawings_dir = located

        crop = await smart_crop_async(image_path, settings.trim_threshold, sink)
        resized, target_width, target_height = await resize_to_bound_async(
            crop.image, settings.png_max_size
        )

        transfer_path = drawings_dir / settings.transfer_filename
        await atomic_write_bytes(transfer_path, await encode_png_async(resized))
        file_uri = transfer_path.as_uri()

        sink.log_event(
            logging.DEBUG,
            "Drawing optimized",
            original=str(crop.original_size),
            cropped=str(crop.cropped_size),
            strategy=crop.strategy,
            target=f"{target_width}x{target_height}",
            uri=file_uri,
        )

        return {
            "content": [
                text_block(
                    f"Drawing optimized successfully. Original: {crop.original_size}, "
                    f"Cropped: {crop.cropped_size}, Final: {target_width}x{target_height}. "
                    f"File: {file_uri}"
                ),
                resource_block(
                    resource_id=f"drawing_{int(time.time() * 1000)}",
                    uri=file_uri,
                    description=f"Optimized drawing image ({target_width}x{target_height})",
                ),
            ]
        }
    except Exception as e:
        sink.log_event(logging.ERROR, "get_drawing_png failed", error=str(e), exc_info=True)
        return text_response(f"Failed to get optimized drawing data: {e}")


async def handle_get_drawing_base64(context: ToolContext | None = None) -> dict[str, Any]:
    """Handle get_drawing_base64 tool call (inline delivery).

    Same crop as get_drawing_png but a smaller bound, and the PNG is returned
    inline as base64 instead of being written to disk.

    Returns:
        Tool result with a single image block
    """
    context = context or get_tool_context()
    sink = context.event_sink
    settings = context.settings
    sink.log_event(logging.DEBUG, "get_drawing_base64 called")

    try:
        located = await _locate_image(context)
        if isinstance(located, dict):
            return located
        image_path, _drawings_dir = located

        crop = await smart_crop_async(image_path, settings.trim_threshold, sink)
        resized, target_width, target_height = await resize_to_bound_async(
            crop.image, settings.base64_max_size
        )
        data = await image_to_base64_async(resized)

        sink.log_event(
            logging.DEBUG,
            "Drawing encoded",
            original=str(crop.original_size),
            cropped=str(crop.cropped_size),
            strategy=crop.strategy,
            target=f"{target_width}x{target_height}",
            encoded_length=len(data),
        )

        return {"content": [image_block(data)]}
    except Exception as e:
        sink.log_event(logging.ERROR, "get_drawing_base64 failed", error=str(e), exc_info=True)
        return text_response(f"Failed to get drawing image: {e}")
