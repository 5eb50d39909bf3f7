"""Filesystem helpers shared by the MCP tools and the drawing store."""

from __future__ import annotations

from pathlib import Path

import aiofiles
import aiofiles.os


async def atomic_write_bytes(file_path: Path, data: bytes) -> None:
    """Write data to file atomically using temp file + rename.

    Readers of file_path see either the previous content or the new content.
    The temp file is a hidden sibling, so it never matches a drawing name.
    """
    temp_file = file_path.with_name(f".{file_path.name}.tmp")
    try:
        async with aiofiles.open(temp_file, "wb") as f:
            await f.write(data)
        # Atomic rename (on POSIX systems)
        await aiofiles.os.replace(temp_file, file_path)
    except Exception:
        if await aiofiles.os.path.exists(temp_file):
            await aiofiles.os.remove(temp_file)
        raise


async def read_bytes(file_path: Path) -> bytes:
    async with aiofiles.open(file_path, "rb") as f:
        return await f.read()
