import datetime

import pytest
from fastapi.testclient import TestClient

from pastry.api.server import create_app
from pastry.api.service import get_snippet_service, grep_service, list_snippets_service, render_index
from pastry.snippet import SnippetStore

T0 = datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)


def _make_client(store: SnippetStore) -> TestClient:
    return TestClient(create_app(store))


def _store_with(*texts: str) -> SnippetStore:
    store = SnippetStore()
    for text in texts:
        store.append(text, now=T0)
    return store


def test_index_renders_newest_first_and_escapes():
    store = _store_with("older paste", "<script>alert(1)</script>")
    client = _make_client(store)

    response = client.get("/")

    assert response.status_code == 200
    body = response.text
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in body
    assert "<script>alert" not in body
    assert body.index("&lt;script&gt;") < body.index("older paste")


def test_index_with_no_snippets_shows_placeholder():
    response = _make_client(SnippetStore()).get("/")

    assert response.status_code == 200
    assert "Nothing pasted yet." in response.text


def test_paste_appends_and_redirects():
    store = SnippetStore()
    client = _make_client(store)

    response = client.post("/paste", data={"text": "from the browser"}, follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/"
    assert store.get(0) == "from the browser"


def test_paste_without_text_is_rejected():
    store = SnippetStore()

    response = _make_client(store).post("/paste", data={})

    assert response.status_code == 422
    assert len(store) == 0


def test_list_snippets_json():
    client = _make_client(_store_with("a", "b"))

    payload = client.get("/snippets").json()

    assert [(item["index"], item["text"]) for item in payload] == [(0, "a"), (1, "b")]


def test_get_snippet_by_index_and_offset():
    client = _make_client(_store_with("a", "b", "c"))

    assert client.get("/snippets/1").json()["text"] == "b"
    assert client.get("/snippets/-1").json()["index"] == 2
    assert client.get("/snippets/7").status_code == 404


def test_grep_endpoint():
    client = _make_client(_store_with("one apple", "two apples\nand pears"))

    payload = client.get("/snippets/grep", params={"term": "pear"}).json()

    assert payload["term"] == "pear"
    assert payload["matches"] == [
        {"index": 1, "line_number": 2, "age": payload["matches"][0]["age"], "line": "and pears"}
    ]


def test_static_assets_are_served():
    client = _make_client(SnippetStore())

    css = client.get("/static/pastry.css")
    icon = client.get("/favicon.svg")

    assert css.status_code == 200
    assert "text/css" in css.headers["content-type"]
    assert icon.status_code == 200
    assert icon.headers["content-type"].startswith("image/svg+xml")


def test_render_index_uses_relative_age():
    store = _store_with("hello")

    page = render_index(store.snapshot(), now=T0 + datetime.timedelta(minutes=3))

    assert "3 minutes ago" in page
    assert "<pre>hello</pre>" in page


def test_services_share_store_state():
    store = _store_with("x", "y")

    assert [item.text for item in list_snippets_service(store)] == ["x", "y"]
    assert get_snippet_service(store).text == "y"
    assert [match.index for match in grep_service(store, "x").matches] == [0]


def test_get_snippet_service_raises_not_found_on_empty_store():
    from fastapi import HTTPException

    with pytest.raises(HTTPException) as excinfo:
        get_snippet_service(SnippetStore())

    assert excinfo.value.status_code == 404


def test_grep_endpoint_with_empty_term_matches_every_line():
    client = _make_client(_store_with("one\ntwo", "three"))

    payload = client.get("/snippets/grep", params={"term": ""}).json()

    assert [(m["index"], m["line_number"]) for m in payload["matches"]] == [(0, 1), (0, 2), (1, 1)]
