"""Bounded reads from an accepted connection."""

from __future__ import annotations

import asyncio
from typing import List


async def read_capped(
    reader: asyncio.StreamReader,
    limit: int,
    *,
    timeout: float | None = None,
    stop: bytes | None = None,
) -> bytes:
    """Read until EOF, ``limit`` bytes, ``stop`` or ``timeout``, whichever comes first.

    Bytes that arrived before the deadline are kept and returned.
    """
    chunks: List[bytes] = []

    async def _fill() -> None:
        received = 0
        while received < limit:
            chunk = await reader.read(limit - received)
            if not chunk:
                return
            chunks.append(chunk)
            received += len(chunk)
            if stop is not None and stop in chunk:
                return

    try:
        await asyncio.wait_for(_fill(), timeout=timeout)
    except asyncio.TimeoutError:
        pass
    return b"".join(chunks)


__all__ = ["read_capped"]
