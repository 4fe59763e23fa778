from typing import Any, Dict, List, Optional, Sequence

from ..data.catalog import get_base_catalog
from ..data.notion_loader import NotionPackLoader
from ..models.data_models import RouteInfo
from ..rule_based.selector import select_packs
from ..service.pipeline import aggregate

_notion_loader: Optional[NotionPackLoader] = None


def _get_notion_loader() -> NotionPackLoader:
    global _notion_loader
    if _notion_loader is None:
        _notion_loader = NotionPackLoader()
    return _notion_loader


def recommend_packs(minutes: int) -> List[Dict[str, Any]]:
    """
    카탈로그 기반 시간 예산 추천.
    """
    packs = select_packs(get_base_catalog(), minutes)
    return [p.to_frontend_dict() for p in packs]


async def recommend_route_packs(
    route: RouteInfo,
    external_pack_ids: Optional[Sequence[str]] = None,
) -> List[Dict[str, Any]]:
    """
    카탈로그 + Notion 페이지들을 합쳐 학습 효율 점수로 재정렬한 추천.
    외부 조회가 전부 실패해도 카탈로그 기반 결과는 항상 돌려준다.
    """
    packs = await aggregate(
        route,
        external_pack_ids,
        catalog=get_base_catalog(),
        fetcher=_get_notion_loader().fetch_by_id,
    )
    return [p.to_frontend_dict() for p in packs]
