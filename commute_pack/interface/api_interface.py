from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence

from .. import config
from ..data.notion_loader import NotionPackLoader
from ..data.storage import create_storage
from ..models.data_models import RouteInfo, SavedRoute
from ..service.route_time import RouteTimeService
from ..service.saved_routes import SavedRouteStore
from .recommend import recommend_packs, recommend_route_packs

logger = logging.getLogger(__name__)

# Store / RouteTimeService 싱글톤
_store: Optional[SavedRouteStore] = None
_route_service: Optional[RouteTimeService] = None


def _get_store() -> SavedRouteStore:
    global _store
    if _store is None:
        _store = SavedRouteStore(create_storage())
    return _store


def _get_route_service() -> RouteTimeService:
    global _route_service
    if _route_service is None:
        _route_service = RouteTimeService()
    return _route_service


def clamp_minutes(value: float) -> int:
    # NaN / Infinity는 round()가 실패하므로 기본값으로 대체
    try:
        minutes = float(value)
    except (TypeError, ValueError):
        minutes = float(config.DEFAULT_MINUTES)
    if not math.isfinite(minutes):
        minutes = float(config.DEFAULT_MINUTES)
    return max(config.MIN_MINUTES, min(config.MAX_MINUTES, round(minutes)))


def resolve_minutes(value: Optional[Any]) -> int:
    """
    쿼리로 들어온 minutes 값 정리.
    숫자가 아니거나 0 이하이면 기본값(25분) 사용.
    """
    if value is None or value == "":
        return config.DEFAULT_MINUTES
    try:
        minutes = float(value)
    except (TypeError, ValueError):
        return config.DEFAULT_MINUTES
    if not math.isfinite(minutes) or minutes <= 0:
        return config.DEFAULT_MINUTES
    return int(minutes)


# ------------------------------------------------------
# ① 시간 기반 학습팩 추천
# ------------------------------------------------------
def get_learning_packs(minutes: Optional[Any] = None) -> Dict[str, Any]:
    budget = resolve_minutes(minutes)
    packs = recommend_packs(budget)
    return {
        "minutes": budget,
        "count": len(packs),
        "packs": packs,
    }


# ------------------------------------------------------
# ② 경로 기반 추천 (카탈로그 + Notion)
# ------------------------------------------------------
async def get_route_packs(
    origin: str,
    destination: str,
    minutes: float,
    mode: str = "transit",
    external_pack_ids: Optional[Sequence[str]] = None,
) -> Dict[str, Any]:
    route = RouteInfo(
        origin=origin,
        destination=destination,
        minutes=clamp_minutes(minutes),
        mode=mode,
    )
    packs = await recommend_route_packs(route, external_pack_ids)
    return {
        "route": {
            "origin": route.origin,
            "destination": route.destination,
            "minutes": route.minutes,
            "mode": route.mode,
        },
        "count": len(packs),
        "packs": packs,
    }


# ------------------------------------------------------
# ③ Notion 페이지 → 학습팩
# ------------------------------------------------------
async def get_notion_pack(page_id: str) -> Dict[str, Any]:
    pack = await NotionPackLoader().fetch_by_id(page_id)
    return pack.to_frontend_dict()


# ------------------------------------------------------
# ④ 경로 소요 시간
# ------------------------------------------------------
async def get_route_time(
    origin: str,
    destination: str,
    mode: str = "transit",
    provider: str = "google",
) -> Dict[str, Any]:
    estimate = await _get_route_service().estimate(origin, destination, mode=mode, provider=provider)
    return estimate.to_frontend_dict()


# ------------------------------------------------------
# ⑤ 저장된 경로
# ------------------------------------------------------
def get_saved_routes() -> Dict[str, Any]:
    routes = _get_store().list()
    return {"count": len(routes), "routes": [r.to_dict() for r in routes]}


def save_route(
    route_id: str,
    label: str,
    origin: str,
    destination: str,
    last_calculated_minutes: int,
) -> Dict[str, Any]:
    route = SavedRoute(
        id=route_id,
        label=label,
        origin=origin,
        destination=destination,
        last_calculated_minutes=last_calculated_minutes,
        last_updated=datetime.now(timezone.utc).isoformat(),
    )
    routes = _get_store().upsert(route)
    logger.info(f"[API] Saved route: id={route_id}, label={label}")
    return {"route": route.to_dict(), "count": len(routes)}


def delete_saved_route(route_id: str) -> Dict[str, Any]:
    routes = _get_store().remove(route_id)
    return {"count": len(routes), "routes": [r.to_dict() for r in routes]}
