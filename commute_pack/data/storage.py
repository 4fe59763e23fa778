from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Protocol

from pymongo import MongoClient

from .. import config


class KeyValueStorage(Protocol):
    """문자열 key → 문자열 value 저장소 인터페이스"""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class InMemoryStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStorage:
    """
    JSON 파일 하나에 {key: value} 형태로 저장.
    - 파일이 없으면 빈 저장소로 취급
    - 쓰기는 임시 파일에 쓴 뒤 교체 (중간에 죽어도 기존 파일 유지)
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"storage file is not a JSON object: {self.path}")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except ValueError:
            data = {}
        data[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(self.path)


class MongoStorage:
    """
    MongoDB 컬렉션 기반 저장소. key 하나당 document 하나.
    { "_id": key, "value": "...", "updated_at": datetime }
    """

    def __init__(self, client: Optional[MongoClient] = None, db_name: str = None, collection: str = None):
        if client is None:
            client = MongoClient(
                config.MONGO_URI,
                serverSelectionTimeoutMS=5000,
                connectTimeoutMS=5000,
            )
        self.client = client
        self.db = self.client[db_name or config.MONGO_DB]
        self.col = self.db[collection or config.MONGO_COLLECTION]

    def get(self, key: str) -> Optional[str]:
        doc = self.col.find_one({"_id": key})
        if not doc:
            return None
        value = doc.get("value")
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        self.col.update_one(
            {"_id": key},
            {"$set": {"value": value, "updated_at": datetime.now(timezone.utc)}},
            upsert=True,
        )


def create_storage(backend: Optional[str] = None) -> KeyValueStorage:
    backend = (backend or config.STORAGE_BACKEND).lower()
    if backend == "memory":
        return InMemoryStorage()
    if backend == "mongo":
        return MongoStorage()
    return JsonFileStorage(config.STORAGE_PATH)
