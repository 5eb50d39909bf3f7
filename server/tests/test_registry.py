"""Tests for the tool registry."""

import pytest

from draw_it_mcp.errors import UnknownToolError
from draw_it_mcp.tools import TOOL_DESCRIPTORS, TOOL_HANDLERS, ToolName, lookup_tool


class TestRegistry:
    def test_every_tool_has_a_handler(self) -> None:
        assert set(TOOL_HANDLERS) == set(ToolName)

    def test_every_tool_has_one_descriptor(self) -> None:
        names = [d.name for d in TOOL_DESCRIPTORS]
        assert sorted(names) == sorted(ToolName)
        assert len(names) == len(set(names))

    def test_descriptor_wire_format(self) -> None:
        assert TOOL_DESCRIPTORS[0].to_dict() == {
            "name": "get_drawing_png",
            "description": TOOL_DESCRIPTORS[0].description,
            "inputSchema": {"type": "object", "properties": {}, "required": []},
        }


class TestLookupTool:
    @pytest.mark.parametrize("name", ["get_drawing_png", "get_drawing_base64"])
    def test_known_names(self, name: str) -> None:
        assert lookup_tool(name).value == name

    @pytest.mark.parametrize("name", ["foo", "", "get_drawing_png ", "Get_Drawing_Png"])
    def test_unknown_names(self, name: str) -> None:
        with pytest.raises(UnknownToolError, match="Unknown tool"):
            lookup_tool(name)
