"""JSON snapshot file holding the whole snippet collection."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from ..errors import PersistenceFailure
from .model import Snippet

logger = logging.getLogger("pastry")

_COLLECTION = TypeAdapter(List[Snippet])


class SnapshotFile:
    """Save and load the ordered collection at a fixed path.

    ``save`` overwrites the file in place; a crash mid-write can lose the
    newest data, which is accepted.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def save(self, snippets: Sequence[Snippet]) -> None:
        try:
            payload = _COLLECTION.dump_json(list(snippets))
        except (PydanticSerializationError, UnicodeError) as exc:
            raise PersistenceFailure(f"Failed to serialise snippets: {exc}") from exc
        try:
            self.path.write_bytes(payload)
        except OSError as exc:
            raise PersistenceFailure(f"Failed to write {self.path}: {exc}") from exc

    def load(self) -> List[Snippet]:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return []
        except OSError:
            logger.warning("Unable to read snapshot %s; starting empty", self.path, exc_info=True)
            return []

        try:
            return _COLLECTION.validate_json(raw)
        except ValidationError:
            logger.warning("Snapshot %s is corrupt; starting empty", self.path)
            return []


__all__ = ["SnapshotFile"]
