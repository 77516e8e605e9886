"""FastMCP server exposing the snippet store as read-only MCP tools."""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import HTTPException
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from ..api.service import get_snippet_service, grep_service, list_snippets_service
from ..snippet import SnippetStore

logger = logging.getLogger("pastry")


def _handle_http_exception(exc: HTTPException, *, default_message: str) -> ToolError:
    detail = exc.detail if isinstance(exc.detail, str) else None
    return ToolError(detail or default_message)


def create_server(store: SnippetStore) -> FastMCP:
    """Create a FastMCP server bound to ``store``."""

    server = FastMCP("Pastry MCP Server")

    @server.tool(
        name="get",
        description=(
            "Return one pasted snippet. `index` is a position in paste order;"
            " negative values count back from the newest (-1 is the latest)."
            " Omit it to get the latest paste."
        ),
        tags={"snippets"},
    )
    def get(index: str | None = None) -> Dict[str, Any]:
        try:
            response = get_snippet_service(store, index)
        except HTTPException as exc:
            raise _handle_http_exception(exc, default_message="Snippet not found")
        return response.model_dump(mode="json")

    @server.tool(
        name="list",
        description="List every pasted snippet, oldest first, with its index and age.",
        tags={"snippets"},
    )
    def list_snippets() -> Dict[str, Any]:
        snippets = list_snippets_service(store)
        return {"snippets": [snippet.model_dump(mode="json") for snippet in snippets]}

    @server.tool(
        name="grep",
        description=(
            "Find every line containing `term` as a literal substring."
            " An empty term matches every line."
        ),
        tags={"snippets", "search"},
    )
    def grep(term: str) -> Dict[str, Any]:
        return grep_service(store, term).model_dump(mode="json")

    return server


__all__ = ["create_server"]
