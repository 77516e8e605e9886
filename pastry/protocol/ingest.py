"""Write-only protocol: one connection, one buffer, one snippet."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from ..errors import InvalidEncoding, PastryError
from ..snippet import Snippet, SnippetStore
from .stream import read_capped

logger = logging.getLogger("pastry")


@dataclass(slots=True)
class IngestResult:
    snippet: Snippet | None = None
    error: PastryError | None = None

    @property
    def empty(self) -> bool:
        return self.snippet is None and self.error is None

    @property
    def ok(self) -> bool:
        return self.snippet is not None


def ingest(store: SnippetStore, data: bytes) -> IngestResult:
    """Append ``data`` verbatim as one snippet; bad UTF-8 is discarded."""
    if not data:
        return IngestResult()
    try:
        snippet = store.append(data)
    except InvalidEncoding as exc:
        logger.debug("Discarded paste: %s", exc)
        return IngestResult(error=exc)
    return IngestResult(snippet=snippet)


async def handle_write_connection(
    store: SnippetStore,
    reader: asyncio.StreamReader,
    writer: asyncio.StreamWriter,
    *,
    buffer_size: int,
) -> IngestResult | None:
    """Read up to ``buffer_size`` bytes (or until EOF), store them and close.

    There is no read deadline: a silent client keeps its task alive.
    """
    result: IngestResult | None = None
    try:
        data = await read_capped(reader, buffer_size)
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, ingest, store, data)
    except ConnectionError:
        logger.debug("Write client disconnected early", exc_info=True)
    except Exception:
        logger.exception("Failed to serve write connection")
    finally:
        writer.close()
        try:
            await writer.wait_closed()
        except ConnectionError:
            pass
    return result


__all__ = ["IngestResult", "handle_write_connection", "ingest"]
