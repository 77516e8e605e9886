"""FastAPI application factory for the pastry web surface."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from ..config import PastrySettings
from ..mcpserver import create_server
from ..snippet import SnippetStore
from .route import router
from .service import STATIC_DIR


def create_app(store: SnippetStore, settings: PastrySettings | None = None) -> FastAPI:
    """Create the FastAPI application sharing ``store`` with the TCP ports."""

    mcp_app = create_server(store).http_app("/")

    app = FastAPI(
        title="pastry",
        version="0.1.0",
        lifespan=mcp_app.lifespan,
    )
    app.state.store = store
    app.state.settings = settings or PastrySettings()
    app.include_router(router)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    app.mount("/mcp", mcp_app)

    return app


__all__ = ["create_app"]
