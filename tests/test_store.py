"""Tests for the JSON document store."""

import json
from unittest.mock import patch

import pytest
from contest_vote.errors import MalformedDocument, StorageError
from contest_vote.store import JsonDocumentStore


class TestRead:
    def test_missing_document_is_created_with_default(self, store, data_dir):
        result = store.read("votes.json", {"votes": {}})
        assert result == {"votes": {}}
        assert json.loads((data_dir / "votes.json").read_text(encoding="utf-8")) == {"votes": {}}

    def test_creates_data_directory(self, store, data_dir):
        assert not data_dir.exists()
        store.read("ip-votes.json", {})
        assert data_dir.is_dir()

    def test_existing_document_is_returned(self, store, data_dir):
        data_dir.mkdir()
        (data_dir / "ip-votes.json").write_text('{"1.2.3.4": true}', encoding="utf-8")
        assert store.read("ip-votes.json", {}) == {"1.2.3.4": True}

    def test_existing_document_ignores_default(self, store, data_dir):
        data_dir.mkdir()
        (data_dir / "votes.json").write_text('{"votes": {"A-B": 3}}', encoding="utf-8")
        assert store.read("votes.json", {"votes": {}}) == {"votes": {"A-B": 3}}

    def test_invalid_json_raises(self, store, data_dir):
        data_dir.mkdir()
        (data_dir / "votes.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(MalformedDocument):
            store.read("votes.json", {"votes": {}})

    def test_non_object_raises(self, store, data_dir):
        data_dir.mkdir()
        (data_dir / "votes.json").write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(MalformedDocument):
            store.read("votes.json", {"votes": {}})


class TestWrite:
    def test_round_trip_through_fresh_store(self, store, data_dir):
        doc = {"votes": {"Alice-Dance": 2, "ผู้เข้าแข่งขัน-ค้นป่าหาสัตว์": 1}}
        store.write("votes.json", doc)
        assert JsonDocumentStore(data_dir).read("votes.json", {"votes": {}}) == doc

    def test_overwrites_whole_document(self, store):
        store.write("ip-votes.json", {"a": True, "b": True})
        store.write("ip-votes.json", {"c": True})
        assert store.read("ip-votes.json", {}) == {"c": True}

    def test_leaves_no_temporary_files(self, store, data_dir):
        store.write("votes.json", {"votes": {}})
        store.write("votes.json", {"votes": {"x-y": 1}})
        assert [p.name for p in data_dir.iterdir()] == ["votes.json"]

    def test_failed_replace_removes_temporary_file(self, store, data_dir):
        with patch("contest_vote.store.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(StorageError):
                store.write("votes.json", {"votes": {}})
        assert list(data_dir.iterdir()) == []

    def test_unserializable_data_removes_temporary_file(self, store, data_dir):
        with pytest.raises(StorageError):
            store.write("votes.json", {"votes": object()})
        assert list(data_dir.iterdir()) == []
