"""Snippet entity, ordered store and snapshot persistence."""

from .model import GrepMatch, ListEntry, Snippet, relative_age
from .persistence import SnapshotFile
from .snippet_storage import SnippetStore, decode_text

__all__ = [
    "GrepMatch",
    "ListEntry",
    "Snippet",
    "SnapshotFile",
    "SnippetStore",
    "decode_text",
    "relative_age",
]
