from pastry.errors import InvalidEncoding
from pastry.protocol import ingest
from pastry.snippet import SnippetStore


def test_ingest_appends_text_verbatim():
    store = SnippetStore()

    result = ingest(store, b"line one\nline two\n")

    assert result.ok
    assert result.snippet.text == "line one\nline two\n"
    assert store.get(0) == "line one\nline two\n"


def test_ingest_discards_invalid_utf8():
    store = SnippetStore()
    store.append("existing")

    result = ingest(store, b"\xc3\x28 broken")

    assert isinstance(result.error, InvalidEncoding)
    assert not result.ok
    assert len(store) == 1


def test_ingest_ignores_empty_payload():
    store = SnippetStore()

    result = ingest(store, b"")

    assert result.empty
    assert len(store) == 0
