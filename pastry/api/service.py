"""Service-layer helpers shared by the HTTP routes and the MCP tools."""

from __future__ import annotations

import html
import logging
from datetime import datetime
from pathlib import Path
from string import Template
from typing import List, Sequence

from fastapi import HTTPException

from ..errors import OutOfBounds
from ..snippet import Snippet, SnippetStore
from ..snippet.model import utcnow
from .model import GrepMatchResponse, GrepResponse, SnippetResponse

logger = logging.getLogger("pastry")

PACKAGE_DIR = Path(__file__).resolve().parent
STATIC_DIR = PACKAGE_DIR / "static"
INDEX_TEMPLATE = PACKAGE_DIR / "templates" / "index.html"


def render_entries(snippets: Sequence[Snippet], *, now: datetime | None = None) -> str:
    if not snippets:
        return '    <p class="empty">Nothing pasted yet.</p>'

    now = now or utcnow()
    blocks: List[str] = []
    for snippet in snippets:
        blocks.append(
            "    <article>\n"
            f"      <small>{html.escape(snippet.relative_age(now))}</small>\n"
            f"      <pre>{html.escape(snippet.text)}</pre>\n"
            "    </article>"
        )
    return "\n".join(blocks)


def render_index(snippets: Sequence[Snippet], *, now: datetime | None = None) -> str:
    """Render the paste page; ``snippets`` are expected newest first."""
    template = Template(INDEX_TEMPLATE.read_text(encoding="utf-8"))
    return template.safe_substitute(entries=render_entries(snippets, now=now))


def paste_service(store: SnippetStore, text: str) -> Snippet:
    snippet = store.append(text)
    logger.info("Pasted %d chars via HTTP", len(snippet.text))
    return snippet


def list_snippets_service(store: SnippetStore, *, now: datetime | None = None) -> List[SnippetResponse]:
    now = now or utcnow()
    oldest_first = list(reversed(store.snapshot()))
    return [
        SnippetResponse(
            index=index,
            age=snippet.relative_age(now),
            text=snippet.text,
            created_at=snippet.created_at,
        )
        for index, snippet in enumerate(oldest_first)
    ]


def get_snippet_service(
    store: SnippetStore,
    token: str | None = None,
    *,
    now: datetime | None = None,
) -> SnippetResponse:
    with store.locked():
        try:
            index = store.resolve_index(token)
        except OutOfBounds as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        snippet = store.snippet_at(index)

    return SnippetResponse(
        index=index,
        age=snippet.relative_age(now),
        text=snippet.text,
        created_at=snippet.created_at,
    )


def grep_service(store: SnippetStore, term: str, *, now: datetime | None = None) -> GrepResponse:
    matches = store.grep(term, now=now)
    return GrepResponse(
        term=term,
        matches=[GrepMatchResponse.from_match(match) for match in matches],
    )


__all__ = [
    "STATIC_DIR",
    "get_snippet_service",
    "grep_service",
    "list_snippets_service",
    "paste_service",
    "render_entries",
    "render_index",
]
