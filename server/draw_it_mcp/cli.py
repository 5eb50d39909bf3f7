"""CLI for draw-it-mcp.

Usage:
    draw-it-mcp mcp              Run the MCP server over stdio
    draw-it-mcp store            Run the drawing store HTTP service
    draw-it-mcp config           Print MCP client configuration
"""

import json
import sys
from pathlib import Path as FilePath

import typer
from rich.console import Console

from draw_it_mcp.config import settings

app = typer.Typer(
    name="draw-it-mcp",
    help="Let an AI coding assistant see your drawing",
    add_completion=False,
)
# stdout belongs to the MCP protocol, so the console writes to stderr
console = Console(stderr=True)


def mcp_client_config(absolute: bool = False) -> dict:
    """mcpServers entry for Cursor / Claude Code style clients."""
    if absolute:
        server_path = FilePath(__file__).resolve().parent / "server.py"
        entry = {"command": sys.executable, "args": [str(server_path)]}
    else:
        entry = {"command": "draw-it-mcp", "args": ["mcp"]}
    return {"mcpServers": {"draw-it-mcp": entry}}


@app.command("mcp")
def run_mcp() -> None:
    """Run the MCP server over stdin/stdout."""
    from draw_it_mcp.server import main

    main()


@app.command("store")
def run_store(
    host: str = typer.Option(settings.store_host, "--host", help="Bind address"),
    port: int = typer.Option(settings.store_port, "--port", "-p", help="Bind port"),
) -> None:
    """Run the drawing store the canvas app saves to."""
    import uvicorn

    from draw_it_mcp.logging_config import setup_store_logging
    from draw_it_mcp.store import create_app

    setup_store_logging(settings)
    store_app = create_app(settings)
    console.print(
        f"[green]Drawing store on http://{host}:{port}[/green] "
        f"(drawings: {store_app.state.drawing_store.drawings_dir})"
    )
    uvicorn.run(store_app, host=host, port=port, log_config=None)


@app.command("config")
def show_config() -> None:
    """Print MCP configuration to paste into your AI coding assistant."""
    console.print("[bold]MCP Configuration[/bold]")
    console.print("Option 1: installed entry point (recommended)")
    console.print_json(json.dumps(mcp_client_config()))
    console.print("Option 2: absolute path")
    console.print_json(json.dumps(mcp_client_config(absolute=True)))
    console.print(
        "\nSetup:\n"
        "  1. Copy one of the configurations above\n"
        "  2. Paste it into your client's MCP settings\n"
        "  3. Restart the client\n"
        "  4. Start the drawing store (draw-it-mcp store) and draw"
    )


if __name__ == "__main__":
    app()
