"""TCP protocol handlers for the write and read/command ports."""

from .command import CommandReply, execute_command, handle_read_connection
from .ingest import IngestResult, handle_write_connection, ingest

__all__ = [
    "CommandReply",
    "IngestResult",
    "execute_command",
    "handle_read_connection",
    "handle_write_connection",
    "ingest",
]
