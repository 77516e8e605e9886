from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import NamedTuple

import humanize
from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Snippet(BaseModel):
    """One stored paste: its text and the moment it was appended."""

    text: str
    created_at: datetime = Field(default_factory=utcnow)

    model_config = ConfigDict(frozen=True, extra="ignore")

    def relative_age(self, now: datetime | None = None) -> str:
        return relative_age(self.created_at, now)


class ListEntry(NamedTuple):
    index: int
    age: str
    text: str


class GrepMatch(NamedTuple):
    index: int
    line_number: int
    age: str
    line: str


def relative_age(when: datetime, now: datetime | None = None) -> str:
    """Render ``when`` as a human readable age such as ``"33 seconds ago"``."""
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    reference = now or utcnow()
    delta = reference - when
    if delta.total_seconds() < 0:
        delta = timedelta(0)
    return humanize.naturaltime(delta)


__all__ = ["GrepMatch", "ListEntry", "Snippet", "relative_age", "utcnow"]
