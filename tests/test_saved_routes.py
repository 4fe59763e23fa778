"""Unit tests for the saved-route store and its storage backends."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import pytest

from commute_pack.data.storage import InMemoryStorage, JsonFileStorage, MongoStorage, create_storage
from commute_pack.models.data_models import SavedRoute
from commute_pack.service.saved_routes import SAVED_ROUTES_KEY, SavedRouteStore


def _route(route_id: str, label: str = "집 → 회사", minutes: int = 45) -> SavedRoute:
    return SavedRoute(
        id=route_id,
        label=label,
        origin="강남",
        destination="잠실",
        last_calculated_minutes=minutes,
        last_updated="2024-10-26T08:00:00+00:00",
    )


class BrokenStorage:
    """Storage that fails on every call."""

    def get(self, key: str) -> Optional[str]:
        raise OSError("storage unavailable")

    def set(self, key: str, value: str) -> None:
        raise OSError("storage unavailable")


class FlakyStorage(InMemoryStorage):
    """In-memory storage whose reads fail a fixed number of times."""

    def __init__(self, failures: int = 1):
        super().__init__()
        self.failures = failures
        self.writes = 0

    def get(self, key: str) -> Optional[str]:
        if self.failures > 0:
            self.failures -= 1
            raise OSError("transient read failure")
        return super().get(key)

    def set(self, key: str, value: str) -> None:
        self.writes += 1
        super().set(key, value)


class FakeCollection:
    """Minimal stand-in for a pymongo collection."""

    def __init__(self) -> None:
        self.docs: Dict[str, Dict[str, Any]] = {}

    def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return self.docs.get(query["_id"])

    def update_one(self, query: Dict[str, Any], update: Dict[str, Any], upsert: bool = False) -> None:
        doc = self.docs.setdefault(query["_id"], {"_id": query["_id"]}) if upsert else self.docs[query["_id"]]
        doc.update(update["$set"])


class FakeDatabase:
    def __init__(self, collection: FakeCollection) -> None:
        self.collection = collection

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collection


class FakeMongoClient:
    def __init__(self) -> None:
        self.collection = FakeCollection()

    def __getitem__(self, name: str) -> FakeDatabase:
        return FakeDatabase(self.collection)


class TestSavedRouteStore:
    """Tests for upsert / list / remove."""

    def test_empty_by_default(self, memory_store: SavedRouteStore) -> None:
        assert memory_store.list() == []

    def test_upsert_appends(self, memory_store: SavedRouteStore) -> None:
        memory_store.upsert(_route("home-office"))
        memory_store.upsert(_route("office-gym", "회사 → 헬스장", 20))
        assert [r.id for r in memory_store.list()] == ["home-office", "office-gym"]

    def test_upsert_replaces_in_place(self, memory_store: SavedRouteStore) -> None:
        memory_store.upsert(_route("a"))
        memory_store.upsert(_route("b"))
        memory_store.upsert(_route("c"))
        memory_store.upsert(_route("b", "updated", 30))

        routes = memory_store.list()
        assert [r.id for r in routes] == ["a", "b", "c"]
        assert routes[1].label == "updated"
        assert routes[1].last_calculated_minutes == 30

    def test_one_entry_per_id(self, memory_store: SavedRouteStore) -> None:
        for _ in range(3):
            memory_store.upsert(_route("same"))
        assert len(memory_store.list()) == 1

    def test_remove(self, memory_store: SavedRouteStore) -> None:
        memory_store.upsert(_route("a"))
        memory_store.upsert(_route("b"))
        memory_store.remove("a")
        assert [r.id for r in memory_store.list()] == ["b"]

    def test_remove_missing_is_noop(self, memory_store: SavedRouteStore) -> None:
        memory_store.upsert(_route("a"))
        assert [r.id for r in memory_store.remove("nope")] == ["a"]

    @pytest.mark.parametrize("raw", ["not json", "{\"id\": \"a\"}", "42", "[1, 2, 3]", "null"])
    def test_corrupt_storage_reads_as_empty(self, raw: str) -> None:
        store = SavedRouteStore(InMemoryStorage({SAVED_ROUTES_KEY: raw}))
        assert store.list() == []

    def test_corrupt_storage_recovers_on_upsert(self) -> None:
        storage = InMemoryStorage({SAVED_ROUTES_KEY: "{{{"})
        store = SavedRouteStore(storage)
        store.upsert(_route("a"))
        assert [r.id for r in store.list()] == ["a"]

    def test_malformed_entries_skipped(self) -> None:
        raw = json.dumps([{"label": "no id"}, _route("ok").to_dict()])
        store = SavedRouteStore(InMemoryStorage({SAVED_ROUTES_KEY: raw}))
        assert [r.id for r in store.list()] == ["ok"]

    def test_unavailable_storage_never_raises(self) -> None:
        store = SavedRouteStore(BrokenStorage())
        assert store.list() == []
        assert [r.id for r in store.upsert(_route("a"))] == ["a"]
        assert store.remove("a") == []

    def test_failed_read_does_not_overwrite_on_upsert(self) -> None:
        storage = FlakyStorage(failures=0)
        store = SavedRouteStore(storage)
        store.upsert(_route("a"))
        store.upsert(_route("b"))

        storage.failures = 1
        assert [r.id for r in store.upsert(_route("c"))] == ["c"]
        assert [r.id for r in store.list()] == ["a", "b"]

    def test_failed_read_does_not_overwrite_on_remove(self) -> None:
        storage = FlakyStorage(failures=0)
        store = SavedRouteStore(storage)
        store.upsert(_route("a"))
        writes = storage.writes

        storage.failures = 1
        assert store.remove("a") == []
        assert storage.writes == writes
        assert [r.id for r in store.list()] == ["a"]

    def test_serialized_format(self) -> None:
        storage = InMemoryStorage()
        SavedRouteStore(storage).upsert(_route("home-office"))
        docs = json.loads(storage.get(SAVED_ROUTES_KEY))
        assert docs == [
            {
                "id": "home-office",
                "label": "집 → 회사",
                "origin": "강남",
                "destination": "잠실",
                "lastCalculatedMinutes": 45,
                "lastUpdated": "2024-10-26T08:00:00+00:00",
            }
        ]


class TestJsonFileStorage:
    """Tests for the file-backed key-value storage."""

    def test_missing_file(self, tmp_path: Path) -> None:
        assert JsonFileStorage(tmp_path / "storage.json").get("k") is None

    def test_survives_new_instance(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "storage.json"
        SavedRouteStore(JsonFileStorage(path)).upsert(_route("a"))
        assert [r.id for r in SavedRouteStore(JsonFileStorage(path)).list()] == ["a"]

    def test_corrupt_file_reads_as_empty_store(self, tmp_path: Path) -> None:
        path = tmp_path / "storage.json"
        path.write_text("definitely not json", encoding="utf-8")
        assert SavedRouteStore(JsonFileStorage(path)).list() == []

    def test_corrupt_file_overwritten_on_set(self, tmp_path: Path) -> None:
        path = tmp_path / "storage.json"
        path.write_text("[]", encoding="utf-8")
        storage = JsonFileStorage(path)
        storage.set("k", "v")
        assert storage.get("k") == "v"


class TestMongoStorage:
    """Tests for the MongoDB-backed key-value storage."""

    def test_get_set(self) -> None:
        client = FakeMongoClient()
        storage = MongoStorage(client=client)
        assert storage.get("k") is None
        storage.set("k", "v1")
        storage.set("k", "v2")
        assert storage.get("k") == "v2"
        assert client.collection.docs["k"]["updated_at"].tzinfo is not None


class TestCreateStorage:
    def test_memory(self) -> None:
        assert isinstance(create_storage("memory"), InMemoryStorage)

    def test_file_default(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setattr("commute_pack.config.STORAGE_PATH", tmp_path / "s.json")
        storage = create_storage("file")
        assert isinstance(storage, JsonFileStorage)
        assert storage.path == tmp_path / "s.json"
