import datetime

import pytest
from pydantic_core import PydanticSerializationError

from pastry.errors import PersistenceFailure
from pastry.snippet import SnapshotFile, Snippet, SnippetStore


def test_save_then_load_round_trip(tmp_path):
    snapshot = SnapshotFile(tmp_path / "pastes.json")
    snippets = [
        Snippet(text="one apple", created_at=datetime.datetime(2024, 1, 1, 12, 0, tzinfo=datetime.timezone.utc)),
        Snippet(text="multi\nline\n", created_at=datetime.datetime(2024, 1, 2, 8, 30, 15, 250000, tzinfo=datetime.timezone.utc)),
    ]

    snapshot.save(snippets)

    loaded = snapshot.load()
    assert [(s.text, s.created_at) for s in loaded] == [(s.text, s.created_at) for s in snippets]


def test_save_overwrites_previous_file(tmp_path):
    snapshot = SnapshotFile(tmp_path / "pastes.json")
    snapshot.save([Snippet(text="a"), Snippet(text="b")])

    snapshot.save([Snippet(text="c")])

    assert [s.text for s in snapshot.load()] == ["c"]


def test_load_missing_file_is_empty(tmp_path):
    assert SnapshotFile(tmp_path / "absent.json").load() == []


def test_load_corrupt_file_is_empty(tmp_path):
    path = tmp_path / "pastes.json"
    path.write_text('[{"text": "trunc', encoding="utf-8")

    assert SnapshotFile(path).load() == []


def test_load_wrong_shape_is_empty(tmp_path):
    path = tmp_path / "pastes.json"
    path.write_text('{"text": "not a list"}', encoding="utf-8")

    assert SnapshotFile(path).load() == []


class _BrokenAdapter:
    def dump_json(self, _snippets):
        raise PydanticSerializationError("cannot serialise")


def test_serialisation_error_becomes_persistence_failure(tmp_path, monkeypatch):
    monkeypatch.setattr("pastry.snippet.persistence._COLLECTION", _BrokenAdapter())
    path = tmp_path / "pastes.json"

    with pytest.raises(PersistenceFailure):
        SnapshotFile(path).save([Snippet(text="a")])
    assert not path.exists()


def test_store_survives_serialisation_error(tmp_path, monkeypatch):
    monkeypatch.setattr("pastry.snippet.persistence._COLLECTION", _BrokenAdapter())
    store = SnippetStore(snapshot_file=SnapshotFile(tmp_path / "pastes.json"))

    store.append("kept in memory")

    assert store.get(0) == "kept in memory"
    assert isinstance(store.last_persist_error, PersistenceFailure)
