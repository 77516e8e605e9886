"""pastry: a pastebin server for the home network."""

from .config import PastrySettings
from .errors import InvalidEncoding, OutOfBounds, PastryError, PersistenceFailure, UnknownCommand
from .snippet import Snippet, SnapshotFile, SnippetStore

__all__ = [
    "InvalidEncoding",
    "OutOfBounds",
    "PastryError",
    "PastrySettings",
    "PersistenceFailure",
    "Snippet",
    "SnapshotFile",
    "SnippetStore",
    "UnknownCommand",
]
