"""Process bootstrap: bind the write, read and HTTP ports and serve them."""

from __future__ import annotations

import asyncio
import logging
from typing import List

import uvicorn

from .api.server import create_app
from .config import PastrySettings
from .errors import configure_logging
from .protocol import handle_read_connection, handle_write_connection
from .snippet import SnippetStore

logger = logging.getLogger("pastry")


class PastryServer:
    """Serve one shared store on the two TCP ports and the HTTP surface."""

    def __init__(self, settings: PastrySettings, store: SnippetStore) -> None:
        self.settings = settings
        self.store = store
        self.write_server: asyncio.AbstractServer | None = None
        self.read_server: asyncio.AbstractServer | None = None

    async def start(self) -> None:
        """Bind both TCP ports; raises ``OSError`` if either is unavailable."""
        self.write_server = await asyncio.start_server(
            self._on_write, self.settings.host, self.settings.write_port
        )
        logger.info("Write port listening on %s:%d", self.settings.host, self.write_port)

        try:
            self.read_server = await asyncio.start_server(
                self._on_read, self.settings.host, self.settings.read_port
            )
        except OSError:
            await self.close()
            raise
        logger.info("Read port listening on %s:%d", self.settings.host, self.read_port)

    @property
    def write_port(self) -> int:
        return _bound_port(self.write_server, self.settings.write_port)

    @property
    def read_port(self) -> int:
        return _bound_port(self.read_server, self.settings.read_port)

    async def serve(self) -> None:
        """Run until the HTTP server is asked to exit (e.g. by SIGINT)."""
        await self.start()
        config = uvicorn.Config(
            create_app(self.store, self.settings),
            host=self.settings.host,
            port=self.settings.http_port,
            log_config=None,
        )
        http_server = uvicorn.Server(config)
        try:
            await http_server.serve()
        finally:
            await self.close()

    async def close(self) -> None:
        servers: List[asyncio.AbstractServer] = [
            server for server in (self.write_server, self.read_server) if server is not None
        ]
        for server in servers:
            server.close()
        await asyncio.gather(*(server.wait_closed() for server in servers))
        self.write_server = None
        self.read_server = None

    async def _on_write(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        await handle_write_connection(
            self.store, reader, writer, buffer_size=self.settings.buffer_size
        )

    async def _on_read(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        await handle_read_connection(
            self.store,
            reader,
            writer,
            buffer_size=self.settings.buffer_size,
            read_timeout=self.settings.read_timeout,
        )


def _bound_port(server: asyncio.AbstractServer | None, fallback: int) -> int:
    sockets = getattr(server, "sockets", None)
    if not sockets:
        return fallback
    return sockets[0].getsockname()[1]


def run(settings: PastrySettings) -> int:
    """Load the store, bind every port and serve; returns the exit status."""
    configure_logging(settings.log_level)

    cache_file = settings.cache_file
    try:
        cache_file.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        logger.exception("Failed to create cache directory %s", cache_file.parent)
        return 1

    store = SnippetStore.from_file(cache_file)
    server = PastryServer(settings, store)
    try:
        asyncio.run(server.serve())
    except OSError:
        logger.exception("Failed to bind listening ports")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    return 0


__all__ = ["PastryServer", "run"]
