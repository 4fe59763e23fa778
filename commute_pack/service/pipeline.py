from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Awaitable, Callable, List, Optional, Sequence

from ..data.preprocess import dedupe_tags
from ..models.data_models import LearningPack, RouteInfo
from ..rule_based.scoring import compute_efficiency_score, score_units
from ..rule_based.selector import fit_to_budget, select_packs

logger = logging.getLogger(__name__)

PackFetcher = Callable[[str], Awaitable[LearningPack]]


async def _fetch_one(fetcher: PackFetcher, pack_id: str) -> Optional[LearningPack]:
    # 개별 fetch 실패는 여기서 잡아서 다른 fetch에 영향 없게
    try:
        pack = await fetcher(pack_id)
    except Exception as e:
        logger.warning(f"[Aggregator] ⚠️ External pack fetch failed: id={pack_id}, error={e!r}")
        return None

    if not isinstance(pack, LearningPack) or not pack.is_valid:
        logger.warning(f"[Aggregator] ⚠️ Invalid external pack dropped: id={pack_id}")
        return None
    return replace(pack, tags=dedupe_tags(pack.tags))


async def fetch_external_packs(fetcher: PackFetcher, pack_ids: Sequence[str]) -> List[LearningPack]:
    """
    모든 id를 동시에 요청하고 성공한 것만 입력 id 순서대로 반환.
    """
    results = await asyncio.gather(*(_fetch_one(fetcher, pid) for pid in pack_ids))
    return [p for p in results if p is not None]


def rank_by_efficiency(candidates: Sequence[LearningPack]) -> List[LearningPack]:
    # 점수 내림차순, 동점이면 입력 순서 유지 (sorted는 안정 정렬)
    return sorted(candidates, key=score_units, reverse=True)


async def aggregate(
    route: RouteInfo,
    external_pack_ids: Optional[Sequence[str]] = None,
    *,
    catalog: Sequence[LearningPack],
    fetcher: Optional[PackFetcher] = None,
) -> List[LearningPack]:
    """
    1) 카탈로그에서 시간 예산 기반 기본 팩 선택
    2) 외부 팩(Notion 등) 동시 조회, 실패는 조용히 제외
    3) 기본 + 외부 팩을 학습 효율 점수로 재정렬
    4) 같은 greedy 방식으로 다시 시간 예산에 맞춤
    어떤 예외가 나도 호출자에게 던지지 않고 카탈로그 기반 결과로 대체한다.
    """
    try:
        logger.info("=" * 60)
        logger.info(
            f"[Aggregator] 🚀 Route packs: {route.origin} → {route.destination}, "
            f"minutes={route.minutes}, mode={route.mode}, external_ids={list(external_pack_ids or [])}"
        )

        base_packs = select_packs(catalog, route.minutes)
        logger.info(f"[Aggregator] 📊 Step 1: base packs {len(base_packs)}개 선택")

        external: List[LearningPack] = []
        if external_pack_ids and fetcher is not None:
            external = await fetch_external_packs(fetcher, list(external_pack_ids))
            logger.info(f"[Aggregator] 📥 Step 2: external packs {len(external)}/{len(external_pack_ids)}개 수신")

        candidates = base_packs + external
        ranked = rank_by_efficiency(candidates)

        for i, p in enumerate(ranked[:3]):
            score, feats = compute_efficiency_score(p)
            logger.info(f"[Aggregator]   후보 {i+1}: {p.title[:40]} | score={score:.2f} | {feats}")

        result = fit_to_budget(ranked, route.minutes)
        if not result and ranked:
            result = ranked[:1]

        logger.info(f"[Aggregator] ✅ 최종 {len(result)}개 선택")
        logger.info("=" * 60)
        return result

    except Exception as e:
        logger.error(f"[Aggregator] Aggregation failed, falling back to catalog: {e!r}")
        try:
            return select_packs(catalog, route.minutes)
        except Exception as fallback_error:
            logger.error(f"[Aggregator] Catalog fallback failed: {fallback_error!r}")
            return []
