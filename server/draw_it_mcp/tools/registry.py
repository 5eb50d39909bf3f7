"""Tool descriptors and name-to-handler dispatch."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from draw_it_mcp.errors import UnknownToolError

from .context import ToolContext
from .drawing import handle_get_drawing_base64, handle_get_drawing_png


class ToolName(str, Enum):
    """Every tool the server exposes."""

    GET_DRAWING_PNG = "get_drawing_png"
    GET_DRAWING_BASE64 = "get_drawing_base64"


def _no_arguments() -> dict[str, Any]:
    return {"type": "object", "properties": {}, "required": []}


@dataclass(frozen=True)
class ToolDescriptor:
    name: ToolName
    description: str
    input_schema: dict[str, Any] = field(default_factory=_no_arguments)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name.value,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


TOOL_DESCRIPTORS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        ToolName.GET_DRAWING_PNG,
        "Retrieve and analyze the current drawing image. Automatically applies smart "
        "cropping to remove whitespace and resizes to 640x640 (max) for efficient "
        "analysis. Returns a local file reference to the optimized PNG. Use this tool "
        "when users want to: examine drawing content, recreate drawings in HTML/CSS, "
        "analyze visual elements, convert drawings to code, or get detailed information "
        "about shapes, lines, and text in the image. Prefer this tool; if the file "
        "reference cannot be opened, call get_drawing_base64 instead.",
    ),
    ToolDescriptor(
        ToolName.GET_DRAWING_BASE64,
        "Retrieve the current drawing as an inline base64 PNG, smart cropped and "
        "resized to 128x128 (max). Use this only as a fallback when get_drawing_png "
        "fails or its file reference cannot be read in your environment.",
    ),
)

ToolHandler = Callable[[ToolContext], Awaitable[dict[str, Any]]]

TOOL_HANDLERS: dict[ToolName, ToolHandler] = {
    ToolName.GET_DRAWING_PNG: handle_get_drawing_png,
    ToolName.GET_DRAWING_BASE64: handle_get_drawing_base64,
}


def lookup_tool(name: str) -> ToolName:
    """Map a requested tool name to its ToolName.

    Raises:
        UnknownToolError: If name is not an exact match for a registered tool.
    """
    try:
        return ToolName(name)
    except ValueError:
        raise UnknownToolError(name) from None


async def dispatch_tool(name: str, context: ToolContext) -> dict[str, Any]:
    """Run the handler registered for name."""
    return await TOOL_HANDLERS[lookup_tool(name)](context)
