"""MCP stdio server exposing the drawing retrieval tools.

Every outgoing response, success or error, is serialized to JSON and parsed
back before it is handed to the transport. A response that fails this check is
a bug: it is logged in full and the request fails, rather than sending the
client a malformed message.
"""

from __future__ import annotations

import asyncio
import itertools
import json
import logging
from typing import Any

import mcp.types as types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from draw_it_mcp import __version__
from draw_it_mcp.config import settings
from draw_it_mcp.errors import ResponseValidationError
from draw_it_mcp.logging_config import REQUEST_LOGGER_NAME, setup_mcp_logging
from draw_it_mcp.tools import (
    TOOL_DESCRIPTORS,
    ToolContext,
    dispatch_tool,
    error_response,
    get_tool_context,
    set_tool_context,
)

SERVER_NAME = "draw-it-mcp"

logger = logging.getLogger(__name__)
request_logger = logging.getLogger(REQUEST_LOGGER_NAME)

# Fallback ids for tool calls made outside an MCP request (tests, direct use)
_local_request_ids = itertools.count(1)


def validate_response(
    response: dict[str, Any], request_type: str, request_id: types.RequestId | None = None
) -> dict[str, Any]:
    """Check response survives a JSON round trip.

    Raises:
        ResponseValidationError: If the response cannot be serialized.
    """
    try:
        json_string = json.dumps(response, allow_nan=False)
        json.loads(json_string)
    except (TypeError, ValueError) as e:
        logger.error(
            f"MCP Response - {request_type} - JSON Invalid",
            extra={"request_id": request_id, "error": str(e), "response": repr(response)},
        )
        raise ResponseValidationError(f"Invalid JSON response for {request_type}: {e}") from e

    request_logger.debug(
        f"MCP Response - {request_type} - JSON Valid",
        extra={"request_id": request_id, "json_length": len(json_string)},
    )
    return response


def list_tools_response() -> dict[str, Any]:
    request_logger.info("MCP Request - ListTools")
    return validate_response(
        {"tools": [descriptor.to_dict() for descriptor in TOOL_DESCRIPTORS]}, "ListTools"
    )


def list_resources_response() -> dict[str, Any]:
    request_logger.info("MCP Request - ListResources")
    return validate_response({"resources": []}, "ListResources")


def list_prompts_response() -> dict[str, Any]:
    request_logger.info("MCP Request - ListPrompts")
    return validate_response({"prompts": []}, "ListPrompts")


async def call_tool_response(
    name: str,
    arguments: dict[str, Any] | None,
    context: ToolContext | None = None,
    request_id: types.RequestId | None = None,
) -> dict[str, Any]:
    """Run a tool and return its validated response.

    Every log line for the call carries request_id (the JSON-RPC id when
    served over MCP, otherwise a process-local counter).

    Unknown tools and handler exceptions become an "Error: ..." text response.
    Only ResponseValidationError escapes.
    """
    context = context or get_tool_context()
    if request_id is None:
        request_id = f"local-{next(_local_request_ids)}"
    request_logger.info(
        "MCP Request - CallTool",
        extra={"request_id": request_id, "tool": name, "arguments": arguments},
    )

    try:
        response = await dispatch_tool(name, context)
        validated = validate_response(response, f"CallTool-{name}", request_id)
        request_logger.info(
            "MCP Response - CallTool",
            extra={"request_id": request_id, "tool": name, "success": True},
        )
        return validated
    except ResponseValidationError:
        raise
    except Exception as e:
        request_logger.error(
            "MCP Response - CallTool Error",
            extra={"request_id": request_id, "tool": name, "error": str(e)},
        )
        return validate_response(error_response(str(e)), f"CallTool-{name}-Error", request_id)


def to_mcp_content(block: dict[str, Any]) -> Any:
    """Convert a response content block to its MCP wire type.

    The resource block becomes an EmbeddedResource: its own keys are kept as
    extra fields and the nested text resource carries the description.
    """
    kind = block.get("type")
    if kind == "text":
        return types.TextContent(type="text", text=block["text"])
    if kind == "image":
        return types.ImageContent(type="image", data=block["data"], mimeType=block["mimeType"])
    if kind == "resource":
        extras = {k: v for k, v in block.items() if k != "type"}
        return types.EmbeddedResource(
            type="resource",
            resource=types.TextResourceContents(
                uri=block["uri"], mimeType="text/plain", text=block["description"]
            ),
            **extras,
        )
    raise ResponseValidationError(f"Unsupported content block type: {kind!r}")


def create_server(context: ToolContext | None = None) -> Server:
    """Create the MCP server with the drawing tools registered."""
    context = context or get_tool_context()
    set_tool_context(context)
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [types.Tool(**tool) for tool in list_tools_response()["tools"]]

    @server.list_resources()
    async def list_resources() -> list[types.Resource]:
        return [types.Resource(**r) for r in list_resources_response()["resources"]]

    @server.list_prompts()
    async def list_prompts() -> list[types.Prompt]:
        return [types.Prompt(**p) for p in list_prompts_response()["prompts"]]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[Any]:
        response = await call_tool_response(
            name, arguments, context, request_id=server.request_context.request_id
        )
        return [to_mcp_content(block) for block in response["content"]]

    return server


async def run_stdio(context: ToolContext | None = None) -> None:
    """Serve MCP over stdin/stdout until the client disconnects."""
    server = create_server(context)
    async with stdio_server() as (read_stream, write_stream):
        # Only log to files, never stdout: stdout carries the protocol
        logger.info("Draw-it MCP server running with stdio transport")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    setup_mcp_logging(settings)
    try:
        asyncio.run(run_stdio())
    except Exception:
        logger.exception("MCP server failed to start")
        raise


if __name__ == "__main__":
    main()
