from .catalog import BASE_PACKS, get_base_catalog
from .preprocess import dedupe_tags, normalize_text
from .storage import InMemoryStorage, JsonFileStorage, MongoStorage, create_storage

__all__ = [
    "BASE_PACKS",
    "get_base_catalog",
    "dedupe_tags",
    "normalize_text",
    "InMemoryStorage",
    "JsonFileStorage",
    "MongoStorage",
    "create_storage",
]
