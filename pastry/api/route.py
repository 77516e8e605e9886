"""FastAPI routes for the browser page and the JSON snippet endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Form, Query, Request, status
from fastapi.responses import FileResponse, HTMLResponse, RedirectResponse

from ..snippet import SnippetStore
from .model import GrepResponse, SnippetResponse
from .service import (
    STATIC_DIR,
    get_snippet_service,
    grep_service,
    list_snippets_service,
    paste_service,
    render_index,
)


def get_store(request: Request) -> SnippetStore:
    store = getattr(request.app.state, "store", None)
    if not isinstance(store, SnippetStore):
        raise RuntimeError("Snippet store has not been initialised")
    return store


router = APIRouter()


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def show_snippets(store: SnippetStore = Depends(get_store)) -> HTMLResponse:
    return HTMLResponse(content=render_index(store.snapshot()))


@router.post("/paste", include_in_schema=False)
def paste(
    text: str = Form(..., description="Text to store as a new snippet"),
    store: SnippetStore = Depends(get_store),
) -> RedirectResponse:
    paste_service(store, text)
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/favicon.svg", include_in_schema=False)
def favicon() -> FileResponse:
    return FileResponse(STATIC_DIR / "favicon.svg", media_type="image/svg+xml")


@router.get("/snippets", response_model=List[SnippetResponse])
def list_snippets(store: SnippetStore = Depends(get_store)) -> List[SnippetResponse]:
    return list_snippets_service(store)


@router.get("/snippets/grep", response_model=GrepResponse)
def grep_snippets(
    term: str = Query(..., description="Literal substring to look for in every line"),
    store: SnippetStore = Depends(get_store),
) -> GrepResponse:
    return grep_service(store, term)


@router.get("/snippets/{index}", response_model=SnippetResponse)
def get_snippet(index: str, store: SnippetStore = Depends(get_store)) -> SnippetResponse:
    """Fetch one snippet; negative indices count back from the newest."""
    return get_snippet_service(store, index)


__all__ = ["get_store", "router"]
