"""In-memory ordered snippet store guarded by a single lock."""

from __future__ import annotations

import logging
import re
import threading
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Sequence

from ..errors import InvalidEncoding, OutOfBounds, PersistenceFailure
from .model import GrepMatch, ListEntry, Snippet, utcnow
from .persistence import SnapshotFile

logger = logging.getLogger("pastry")

_INTEGER = re.compile(r"[+-]?[0-9]+")


def decode_text(data: bytes | str) -> str:
    """Return ``data`` as text, raising :class:`InvalidEncoding` for bad UTF-8."""
    if isinstance(data, str):
        try:
            data.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise InvalidEncoding("Text contains characters that cannot be encoded as UTF-8") from exc
        return data
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidEncoding(f"Payload of {len(data)} bytes is not valid UTF-8") from exc


class SnippetStore:
    """Single source of truth for the ordered snippet collection.

    Every public operation runs under one re-entrant lock, so callers that
    need several operations to observe the same state (resolve then read,
    or render a whole table) can wrap them in :meth:`locked`.
    Indices are positions, not keys: dropping an entry shifts every later
    entry down by one.
    """

    def __init__(
        self,
        snippets: Sequence[Snippet] | None = None,
        *,
        snapshot_file: SnapshotFile | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._snippets: List[Snippet] = list(snippets or [])
        self.snapshot_file = snapshot_file
        self.last_persist_error: PersistenceFailure | None = None

    @classmethod
    def from_file(cls, path: str | Path) -> "SnippetStore":
        snapshot_file = SnapshotFile(path)
        snippets = snapshot_file.load()
        logger.info("Loaded %d snippet(s) from %s", len(snippets), snapshot_file.path)
        return cls(snippets, snapshot_file=snapshot_file)

    @contextmanager
    def locked(self) -> Iterator["SnippetStore"]:
        with self._lock:
            yield self

    def __len__(self) -> int:
        with self._lock:
            return len(self._snippets)

    def append(self, data: bytes | str, *, now: datetime | None = None) -> Snippet:
        text = decode_text(data)
        with self._lock:
            snippet = Snippet(text=text, created_at=now or utcnow())
            self._snippets.append(snippet)
            logger.debug("Appended snippet #%d (%d chars)", len(self._snippets) - 1, len(text))
            self._persist()
            return snippet

    def resolve_index(self, token: str | None = None) -> int:
        """Translate a client index token into a bounds-checked position.

        ``None`` means no argument was given and selects the newest entry.
        Non-negative values are absolute positions; values ``<= 0`` count
        back from the end, so ``-1`` is the newest entry.
        """
        with self._lock:
            length = len(self._snippets)
            if token is None:
                index = length - 1
            elif _INTEGER.fullmatch(token):
                value = int(token)
                if 0 <= value < length:
                    index = value
                elif value <= 0 and length + value >= 0:
                    index = length + value
                else:
                    raise OutOfBounds(token, length)
            else:
                raise OutOfBounds(token, length)

            if not 0 <= index < length:
                raise OutOfBounds(token, length)
            return index

    def snippet_at(self, index: int) -> Snippet:
        with self._lock:
            self._check_index(index)
            return self._snippets[index]

    def get(self, index: int) -> str:
        return self.snippet_at(index).text

    def list(self, *, now: datetime | None = None) -> List[ListEntry]:
        with self._lock:
            now = now or utcnow()
            return [
                ListEntry(index, snippet.relative_age(now), snippet.text)
                for index, snippet in enumerate(self._snippets)
            ]

    def grep(self, term: str, *, now: datetime | None = None) -> List[GrepMatch]:
        """Return every line containing ``term`` literally, in store then line order."""
        with self._lock:
            now = now or utcnow()
            matches: List[GrepMatch] = []
            for index, snippet in enumerate(self._snippets):
                age: str | None = None
                for line_number, line in enumerate(snippet.text.split("\n"), start=1):
                    if term in line:
                        if age is None:
                            age = snippet.relative_age(now)
                        matches.append(GrepMatch(index, line_number, age, line))
            return matches

    def drop(self, index: int) -> Snippet:
        with self._lock:
            self._check_index(index)
            removed = self._snippets.pop(index)
            logger.debug("Dropped snippet #%d", index)
            self._persist()
            return removed

    def snapshot(self) -> List[Snippet]:
        """Return the collection newest first."""
        with self._lock:
            return list(reversed(self._snippets))

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._snippets):
            raise OutOfBounds(str(index), len(self._snippets))

    def _persist(self) -> None:
        if self.snapshot_file is None:
            return
        try:
            self.snapshot_file.save(self._snippets)
        except PersistenceFailure as exc:
            logger.exception("Failed to persist snippets")
            self.last_persist_error = exc
        else:
            self.last_persist_error = None


__all__ = ["SnippetStore", "decode_text"]
