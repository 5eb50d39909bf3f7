"""MCP tools for drawing retrieval.

This package provides the tools exposed by the MCP server:
- get_drawing_png: Cropped/resized drawing written to disk, returned as a file reference
- get_drawing_base64: Smaller cropped/resized drawing returned inline
"""

from .content import (
    error_response,
    image_block,
    resource_block,
    text_block,
    text_response,
)
from .context import ToolContext, get_tool_context, set_tool_context
from .drawing import handle_get_drawing_base64, handle_get_drawing_png
from .registry import (
    TOOL_DESCRIPTORS,
    TOOL_HANDLERS,
    ToolDescriptor,
    ToolName,
    dispatch_tool,
    lookup_tool,
)

__all__ = [
    # Context
    "ToolContext",
    "get_tool_context",
    "set_tool_context",
    # Content blocks
    "error_response",
    "image_block",
    "resource_block",
    "text_block",
    "text_response",
    # Handlers
    "handle_get_drawing_png",
    "handle_get_drawing_base64",
    # Registry
    "TOOL_DESCRIPTORS",
    "TOOL_HANDLERS",
    "ToolDescriptor",
    "ToolName",
    "dispatch_tool",
    "lookup_tool",
]
