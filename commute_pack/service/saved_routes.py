from __future__ import annotations

import json
import logging
from typing import List, Tuple

from ..data.storage import KeyValueStorage
from ..models.data_models import SavedRoute

logger = logging.getLogger(__name__)

SAVED_ROUTES_KEY = "commute-pack:saved-routes"


class SavedRouteStore:
    """
    저장된 경로 목록 관리 (id 기준 upsert / 삭제).

    저장소가 없거나 깨져 있어도 예외를 던지지 않고 빈 목록으로 취급한다.
    여러 프로세스가 같은 저장소를 쓰면 마지막 쓰기가 이긴다.
    """

    def __init__(self, storage: KeyValueStorage, key: str = SAVED_ROUTES_KEY):
        self.storage = storage
        self.key = key

    def list(self) -> List[SavedRoute]:
        routes, _ = self._read()
        return routes

    def _read(self) -> Tuple[List[SavedRoute], bool]:
        """
        (routes, readable) 반환.
        readable=False면 저장소 접근 자체가 실패한 것이므로 이 목록으로 덮어쓰면 안 된다.
        값이 없거나 깨진 경우는 readable=True인 빈 목록.
        """
        try:
            raw = self.storage.get(self.key)
        except Exception as e:
            logger.warning(f"[Store] Storage read failed: {e!r}")
            return [], False
        if not raw:
            return [], True

        try:
            docs = json.loads(raw)
        except ValueError:
            logger.warning("[Store] Saved routes are not valid JSON, treating as empty")
            return [], True
        if not isinstance(docs, list):
            return [], True

        routes: List[SavedRoute] = []
        seen = set()
        for doc in docs:
            try:
                route = SavedRoute.from_dict(doc)
            except (KeyError, TypeError, ValueError, AttributeError):
                continue
            if route.id in seen:
                continue
            seen.add(route.id)
            routes.append(route)
        return routes, True

    def _write(self, routes: List[SavedRoute]) -> None:
        payload = json.dumps([r.to_dict() for r in routes], ensure_ascii=False)
        try:
            self.storage.set(self.key, payload)
        except Exception as e:
            logger.warning(f"[Store] Storage write failed: {e!r}")

    def upsert(self, route: SavedRoute) -> List[SavedRoute]:
        routes, readable = self._read()
        for idx, existing in enumerate(routes):
            if existing.id == route.id:
                routes[idx] = route
                break
        else:
            routes.append(route)

        if not readable:
            logger.warning(f"[Store] Skipping write after failed read: id={route.id}")
            return routes

        self._write(routes)
        logger.info(f"[Store] Saved route upserted: id={route.id}, total={len(routes)}")
        return routes

    def remove(self, route_id: str) -> List[SavedRoute]:
        routes, readable = self._read()
        remaining = [r for r in routes if r.id != route_id]
        if readable and len(remaining) != len(routes):
            self._write(remaining)
            logger.info(f"[Store] Saved route removed: id={route_id}")
        return remaining
