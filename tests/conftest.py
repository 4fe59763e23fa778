"""Shared test fixtures for commute_pack tests."""

from __future__ import annotations

from typing import Callable, List, Optional

import pytest

from commute_pack.data.storage import InMemoryStorage
from commute_pack.interface import api_interface, recommend
from commute_pack.models.data_models import LearningPack
from commute_pack.service.saved_routes import SavedRouteStore


def make_pack(
    pack_id: str,
    minutes: int,
    tags: Optional[List[str]] = None,
    source: str = "docs",
) -> LearningPack:
    return LearningPack(
        id=pack_id,
        source=source,
        source_label=source.title(),
        title=f"Pack {pack_id}",
        summary=f"Summary of {pack_id}",
        estimated_minutes=minutes,
        tags=list(tags or []),
    )


@pytest.fixture
def pack_factory() -> Callable[..., LearningPack]:
    """Build synthetic packs."""
    return make_pack


@pytest.fixture
def memory_store() -> SavedRouteStore:
    """Saved-route store backed by an in-memory key-value storage."""
    return SavedRouteStore(InMemoryStorage())


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch: pytest.MonkeyPatch, memory_store: SavedRouteStore) -> None:
    """Keep interface singletons isolated per test and off the network/filesystem."""
    monkeypatch.setattr(api_interface, "_store", memory_store)
    monkeypatch.setattr(api_interface, "_route_service", None)
    monkeypatch.setattr(recommend, "_notion_loader", None)
    monkeypatch.setattr("commute_pack.config.NOTION_API_KEY", None)
    monkeypatch.setattr("commute_pack.config.GOOGLE_MAPS_API_KEY", None)
    monkeypatch.setattr("commute_pack.config.KAKAO_REST_API_KEY", None)
