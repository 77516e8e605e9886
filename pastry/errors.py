"""Error taxonomy and logging setup for the pastry server."""

from __future__ import annotations

import logging

LOGGER_NAME = "pastry"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class PastryError(Exception):
    """Base class for every outcome the store and handlers report."""


class InvalidEncoding(PastryError):
    """Payload bytes are not valid UTF-8 text."""


class OutOfBounds(PastryError):
    """An index token did not resolve to a position in the store."""

    def __init__(self, token: str | None, length: int) -> None:
        self.token = token
        self.length = length
        shown = "<latest>" if token is None else repr(token)
        super().__init__(f"Index {shown} out of bounds for {length} snippet(s)")


class PersistenceFailure(PastryError):
    """Reading or writing the snapshot file failed."""


class UnknownCommand(PastryError):
    """The read port received a command name it does not implement."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"Unknown command: {command!r}")


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Install one stream handler on the root logger and return ``pastry``'s.

    Uvicorn runs without its own log config, so its records land on the same
    handler.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)
    return logger


__all__ = [
    "InvalidEncoding",
    "LOGGER_NAME",
    "OutOfBounds",
    "PastryError",
    "PersistenceFailure",
    "UnknownCommand",
    "configure_logging",
]
