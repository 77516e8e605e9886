import json

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from pastry.mcpserver import create_server
from pastry.snippet import SnippetStore


def _store_with(*texts: str) -> SnippetStore:
    store = SnippetStore()
    for text in texts:
        store.append(text)
    return store


def _payload(result):
    return json.loads(result.content[0].text)


@pytest.mark.asyncio
async def test_get_tool_defaults_to_latest():
    server = create_server(_store_with("first", "second"))

    async with Client(server) as client:
        latest = _payload(await client.call_tool("get", {}))
        first = _payload(await client.call_tool("get", {"index": "0"}))

    assert latest["text"] == "second"
    assert first["text"] == "first"


@pytest.mark.asyncio
async def test_get_tool_reports_out_of_bounds():
    server = create_server(_store_with("only"))

    async with Client(server) as client:
        with pytest.raises(ToolError):
            await client.call_tool("get", {"index": "9"})


@pytest.mark.asyncio
async def test_list_and_grep_tools():
    server = create_server(_store_with("one apple", "two apples"))

    async with Client(server) as client:
        listing = _payload(await client.call_tool("list", {}))
        found = _payload(await client.call_tool("grep", {"term": "two"}))

    assert [item["text"] for item in listing["snippets"]] == ["one apple", "two apples"]
    assert [(m["index"], m["line_number"]) for m in found["matches"]] == [(1, 1)]


@pytest.mark.asyncio
async def test_grep_tool_with_empty_term_matches_every_line():
    server = create_server(_store_with("one\ntwo", "three"))

    async with Client(server) as client:
        found = _payload(await client.call_tool("grep", {"term": ""}))

    assert [(m["index"], m["line_number"]) for m in found["matches"]] == [(0, 1), (0, 2), (1, 1)]
