"""Async file-system primitives.

Blocking calls are pushed to a worker thread so they never stall the event
loop while a render is in flight.
"""

from __future__ import annotations

import asyncio
import os


def _exists_sync(path: str) -> bool:
    try:
        return os.path.exists(path)
    except (OSError, ValueError):
        return False


def _read_text_sync(path: str, encoding: str) -> str:
    with open(path, "r", encoding=encoding) as f:
        return f.read()


async def exists(path: str) -> bool:
    """Return True if `path` exists. Unreadable paths count as missing."""
    return await asyncio.to_thread(_exists_sync, path)


async def read_text(path: str, encoding: str = "utf-8") -> str:
    """Read `path` as text.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    return await asyncio.to_thread(_read_text_sync, path, encoding)
