"""Line protocol served on the read/command port.

One request per connection: the client sends a single line such as
``get -1``, ``list``, ``grep term`` or ``drop 3`` and the server writes the
reply and closes. A client that sends nothing within the read timeout gets
the newest snippet.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from ..errors import OutOfBounds, PastryError, UnknownCommand
from ..snippet import GrepMatch, ListEntry, SnippetStore
from .stream import read_capped

logger = logging.getLogger("pastry")

UNKNOWN_COMMAND_NOTICE = "# Unknown command\n"
AGE_WIDTH = 20


@dataclass(slots=True)
class CommandReply:
    """Outcome of one request: the bytes to send back plus any error."""

    command: str | None
    payload: bytes = b""
    error: PastryError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def format_list(entries: Iterable[ListEntry]) -> str:
    lines = []
    for entry in entries:
        text = entry.text.strip("\n")
        lines.append(f"#{entry.index: 3d}\t{entry.age.ljust(AGE_WIDTH)}\t{text}\n")
    return "".join(lines)


def format_grep(matches: Iterable[GrepMatch]) -> str:
    return "".join(
        f"#{match.index: 3d}\t{match.line_number: 3d}\t{match.age.ljust(AGE_WIDTH)}\t{match.line}\n"
        for match in matches
    )


def parse_request(request: str) -> tuple[str | None, str | None, str]:
    """Split a request into ``(command, argument, cleaned_line)``."""
    cleaned = request.replace("\n", "").replace("\r", "")
    tokens = cleaned.split()
    if not tokens:
        return None, None, cleaned
    argument = tokens[1] if len(tokens) > 1 else None
    return tokens[0], argument, cleaned


def grep_term(cleaned: str) -> str:
    """Everything after the first ``"grep "``, embedded spaces included."""
    _, separator, term = cleaned.partition("grep ")
    return term if separator else ""


def execute_command(
    store: SnippetStore,
    request: bytes | None,
    *,
    now: datetime | None = None,
) -> CommandReply:
    """Run one request against ``store`` and render the reply.

    The whole dispatch happens under the store lock so a reply never mixes
    states from before and after a concurrent append or drop.
    """
    if not request:
        return _get(store, "get", None)

    command, argument, cleaned = parse_request(request.decode("utf-8", errors="replace"))
    if command is None:
        return CommandReply(command=None)

    with store.locked():
        if command == "get":
            return _get(store, command, argument)
        if command == "list":
            return CommandReply(command, format_list(store.list(now=now)).encode("utf-8"))
        if command == "grep":
            matches = store.grep(grep_term(cleaned), now=now)
            return CommandReply(command, format_grep(matches).encode("utf-8"))
        if command == "drop":
            try:
                store.drop(store.resolve_index(argument))
            except OutOfBounds as exc:
                logger.debug("drop ignored: %s", exc)
                return CommandReply(command, error=exc)
            return CommandReply(command)

    logger.info("Unknown command %r on read port", command)
    return CommandReply(
        command,
        UNKNOWN_COMMAND_NOTICE.encode("utf-8"),
        error=UnknownCommand(command),
    )


def _get(store: SnippetStore, command: str, argument: str | None) -> CommandReply:
    with store.locked():
        try:
            text = store.get(store.resolve_index(argument))
        except OutOfBounds as exc:
            logger.debug("get ignored: %s", exc)
            return CommandReply(command, error=exc)
    return CommandReply(command, text.encode("utf-8"))


async def handle_read_connection(
    store: SnippetStore,
    reader: asyncio.StreamReader,
    writer: asyncio.StreamWriter,
    *,
    buffer_size: int,
    read_timeout: float,
) -> CommandReply | None:
    """Serve one request on an accepted read-port connection, then close it.

    The request ends at the first newline, EOF, ``buffer_size`` bytes or the
    read deadline. Nothing received before the deadline means an implicit
    ``get``.
    """
    reply: CommandReply | None = None
    try:
        request = await read_capped(reader, buffer_size, timeout=read_timeout, stop=b"\n")

        # The store lock is shared with HTTP worker threads; keep it off the loop.
        loop = asyncio.get_running_loop()
        reply = await loop.run_in_executor(None, execute_command, store, request)
        if reply.payload:
            writer.write(reply.payload)
            await writer.drain()
    except ConnectionError:
        logger.debug("Read client disconnected early", exc_info=True)
    except Exception:
        logger.exception("Failed to serve read connection")
    finally:
        await _close(writer)
    return reply


async def _close(writer: asyncio.StreamWriter) -> None:
    writer.close()
    try:
        await writer.wait_closed()
    except ConnectionError:
        pass


__all__ = [
    "AGE_WIDTH",
    "CommandReply",
    "UNKNOWN_COMMAND_NOTICE",
    "execute_command",
    "format_grep",
    "format_list",
    "grep_term",
    "handle_read_connection",
    "parse_request",
]
