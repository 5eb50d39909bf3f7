"""Structured logging configuration.

Provides JSON-formatted logs with:
- Category detection (mcp, tools, imaging, store, system)
- request_id of the MCP tool call the line belongs to
- Rotating log files, a separate error log and an MCP request audit log

The MCP server speaks its protocol over stdout, so nothing here ever writes to
stdout. Console output, when enabled, goes to stderr.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import TextIO

    from draw_it_mcp.config import Settings

# Logger that receives one line per MCP request and response
REQUEST_LOGGER_NAME = "draw_it_mcp.server.requests"


class StructuredFormatter(logging.Formatter):
    """JSON formatter, one object per line."""

    # Map logger names to categories (first matching prefix wins)
    CATEGORY_MAP = {
        "draw_it_mcp.server": "mcp",
        "draw_it_mcp.tools": "tools",
        "draw_it_mcp.locator": "tools",
        "draw_it_mcp.imaging": "imaging",
        "draw_it_mcp.store": "store",
        "draw_it_mcp.cli": "system",
        "draw_it_mcp.config": "system",
        "mcp": "mcp",
        "uvicorn": "store",
        "fastapi": "store",
    }

    # Standard LogRecord fields to exclude from 'extra'
    STANDARD_FIELDS = {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
        # Also exclude our custom fields we handle explicitly
        "request_id",
    }

    def _get_category(self, logger_name: str) -> str:
        """Determine category from logger name."""
        for prefix, cat in self.CATEGORY_MAP.items():
            if logger_name.startswith(prefix):
                return cat
        return "system"

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_record: dict = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "category": self._get_category(record.name),
            "logger": record.name,
            "message": record.getMessage(),
        }

        if getattr(record, "request_id", None) is not None:
            log_record["request_id"] = record.request_id

        # Collect extra fields
        extra = {}
        for key, value in record.__dict__.items():
            if key not in self.STANDARD_FIELDS and not key.startswith("_"):
                # Try to serialize, fall back to str
                try:
                    json.dumps(value)
                    extra[key] = value
                except (TypeError, ValueError):
                    extra[key] = str(value)
        if extra:
            log_record["extra"] = extra

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record)


class ErrorFilter(logging.Filter):
    """Filter that only allows ERROR and CRITICAL level logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


def _rotating_handler(
    path: str, formatter: logging.Formatter, max_mb: int, backups: int
) -> RotatingFileHandler:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path,
        maxBytes=max_mb * 1024 * 1024,
        backupCount=backups,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def configure_logging(
    *,
    json_format: bool = True,
    log_level: int = logging.INFO,
    log_file: str | None = None,
    error_log_file: str | None = None,
    request_log_file: str | None = None,
    console: bool = True,
    stream: TextIO | None = None,
) -> None:
    """Configure application logging.

    Args:
        json_format: Use JSON formatting (False gives a human-readable line)
        log_level: Minimum log level
        log_file: Path to main log file (None to skip)
        error_log_file: Path to error-only log file (None to skip)
        request_log_file: Path to the MCP request/response log (None to skip)
        console: Attach a stream handler
        stream: Stream to write to (default: sys.stderr)
    """
    import sys

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter: logging.Formatter
    if json_format:
        formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)5s [%(name)s] %(message)s",
            datefmt="%H:%M:%S",
        )

    if console:
        stream_handler = logging.StreamHandler(stream or sys.stderr)
        stream_handler.setFormatter(formatter)
        root_logger.addHandler(stream_handler)

    if log_file:
        root_logger.addHandler(_rotating_handler(log_file, formatter, 20, 14))

    if error_log_file:
        error_handler = _rotating_handler(error_log_file, formatter, 20, 30)
        error_handler.addFilter(ErrorFilter())
        root_logger.addHandler(error_handler)

    request_logger = logging.getLogger(REQUEST_LOGGER_NAME)
    for handler in request_logger.handlers[:]:
        request_logger.removeHandler(handler)
    if request_log_file:
        request_handler = _rotating_handler(request_log_file, formatter, 20, 7)
        request_handler.setLevel(logging.INFO)
        request_logger.addHandler(request_handler)

    # Silence noisy loggers
    noisy_loggers = [
        "httpcore",
        "httpx",
        "PIL",
        "mcp",
        "uvicorn.access",
        "watchfiles",
    ]
    for name in noisy_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_mcp_logging(settings: Settings) -> None:
    """Configure logging for the stdio MCP server (files only, no console)."""
    log_dir = Path(settings.log_dir)
    configure_logging(
        json_format=settings.log_json,
        log_level=logging.getLevelName(settings.log_level.upper()),
        log_file=str(log_dir / "mcp-server.log"),
        error_log_file=str(log_dir / "error.log"),
        request_log_file=str(log_dir / "mcp-requests.log"),
        console=False,
    )


def setup_store_logging(settings: Settings) -> None:
    """Configure logging for the drawing store (human-readable console)."""
    configure_logging(
        json_format=False,
        log_level=logging.INFO,
        log_file=str(Path(settings.log_dir) / "store.log"),
        console=True,
    )
