"""Content block builders for tool responses.

Responses are plain dicts: {"content": [block, ...]}. The server converts them
to MCP wire types after validation.
"""

from __future__ import annotations

from typing import Any

PNG_MIME_TYPE = "image/png"


def text_block(text: str) -> dict[str, Any]:
    return {"type": "text", "text": text}


def resource_block(resource_id: str, uri: str, description: str) -> dict[str, Any]:
    """File reference to an image on the local filesystem."""
    return {
        "type": "resource",
        "resource_id": resource_id,
        "uri": uri,
        "mimeType": PNG_MIME_TYPE,
        "description": description,
    }


def image_block(data: str) -> dict[str, Any]:
    """Inline base64-encoded PNG."""
    return {"type": "image", "data": data, "mimeType": PNG_MIME_TYPE}


def text_response(text: str) -> dict[str, Any]:
    """Response carrying a single text block."""
    return {"content": [text_block(text)]}


def error_response(message: str) -> dict[str, Any]:
    return text_response(f"Error: {message}")
