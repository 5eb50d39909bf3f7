"""draw-it-mcp: let an AI coding assistant see the user's drawing."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("draw-it-mcp")
except PackageNotFoundError:
    __version__ = "0.0.0"
