"""Tests for the draw-it-mcp command line."""

import sys
from pathlib import Path

from typer.testing import CliRunner

from draw_it_mcp.cli import app, mcp_client_config

runner = CliRunner()


class TestMcpClientConfig:
    def test_entry_point_config(self) -> None:
        assert mcp_client_config() == {
            "mcpServers": {"draw-it-mcp": {"command": "draw-it-mcp", "args": ["mcp"]}}
        }

    def test_absolute_config(self) -> None:
        entry = mcp_client_config(absolute=True)["mcpServers"]["draw-it-mcp"]
        assert entry["command"] == sys.executable
        server_path = Path(entry["args"][0])
        assert server_path.is_absolute()
        assert server_path.name == "server.py"
        assert server_path.exists()


class TestConfigCommand:
    def test_prints_configuration(self) -> None:
        result = runner.invoke(app, ["config"])

        assert result.exit_code == 0
        assert "mcpServers" in result.output
        assert "draw-it-mcp" in result.output
        assert "Restart the client" in result.output


def test_help_lists_commands() -> None:
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    for command in ("mcp", "store", "config"):
        assert command in result.output
