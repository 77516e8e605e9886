"""Pydantic models for the JSON endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from ..snippet import GrepMatch


class SnippetResponse(BaseModel):
    index: int = Field(..., description="Current position in the store; shifts after drops")
    age: str = Field(..., description="Relative age, e.g. '3 minutes ago'")
    text: str
    created_at: datetime


class GrepMatchResponse(BaseModel):
    index: int
    line_number: int
    age: str
    line: str

    @classmethod
    def from_match(cls, match: GrepMatch) -> "GrepMatchResponse":
        return cls(
            index=match.index,
            line_number=match.line_number,
            age=match.age,
            line=match.line,
        )


class GrepResponse(BaseModel):
    term: str
    matches: List[GrepMatchResponse]


__all__ = ["GrepMatchResponse", "GrepResponse", "SnippetResponse"]
