"""Tests for session storage implementations."""

import json
from pathlib import Path

from outbound_client.infrastructure import InMemoryStorage, JsonFileStorage


class TestInMemoryStorage:
    def test_set_get_remove(self) -> None:
        storage = InMemoryStorage()
        storage.set_item("token", "abc")
        assert storage.get_item("token") == "abc"
        storage.remove_item("token")
        assert storage.get_item("token") is None

    def test_remove_missing_key_is_noop(self) -> None:
        InMemoryStorage().remove_item("missing")


class TestJsonFileStorage:
    def test_missing_file_reads_as_empty(self, tmp_path: Path) -> None:
        storage = JsonFileStorage(tmp_path / "session.json")
        assert storage.get_item("token") is None

    def test_values_persist_across_instances(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "session.json"
        JsonFileStorage(path).set_item("token", "abc")
        assert JsonFileStorage(path).get_item("token") == "abc"
        assert json.loads(path.read_text(encoding="utf-8")) == {"token": "abc"}

    def test_remove_item(self, tmp_path: Path) -> None:
        storage = JsonFileStorage(tmp_path / "session.json")
        storage.set_item("token", "abc")
        storage.set_item("user", "{}")
        storage.remove_item("token")
        assert storage.get_item("token") is None
        assert storage.get_item("user") == "{}"

    def test_corrupt_file_reads_as_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "session.json"
        path.write_text("{not json", encoding="utf-8")
        storage = JsonFileStorage(path)
        assert storage.get_item("token") is None
        storage.set_item("token", "fresh")
        assert storage.get_item("token") == "fresh"

    def test_non_string_values_are_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "session.json"
        path.write_text(json.dumps({"token": 42, "user": "{}"}), encoding="utf-8")
        storage = JsonFileStorage(path)
        assert storage.get_item("token") is None
        assert storage.get_item("user") == "{}"
