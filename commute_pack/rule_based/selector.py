from typing import Iterable, List, Sequence

from ..models.data_models import LearningPack


def fit_to_budget(ordered: Iterable[LearningPack], budget_minutes: int) -> List[LearningPack]:
    """
    주어진 순서대로 훑으면서 남은 시간에 들어가는 팩만 담는다.
    안 들어가는 팩은 건너뛰고 계속 진행 (break 하지 않음).
    """
    result: List[LearningPack] = []
    used = 0
    for pack in ordered:
        if used + pack.estimated_minutes <= budget_minutes:
            result.append(pack)
            used += pack.estimated_minutes
    return result


def select_packs(catalog: Sequence[LearningPack], budget_minutes: int) -> List[LearningPack]:
    """
    짧은 팩부터 greedy하게 채워 넣는 시간 예산 선택.

    - estimated_minutes 오름차순 안정 정렬 (같은 시간이면 카탈로그 순서 유지)
    - 하나도 안 들어가면 가장 짧은 팩 1개를 예산과 무관하게 반환
    - 빈 카탈로그 → 빈 리스트
    budget_minutes 검증은 호출하는 쪽 책임.
    """
    candidates = [p for p in catalog if p.is_valid]
    ordered = sorted(candidates, key=lambda p: p.estimated_minutes)

    result = fit_to_budget(ordered, budget_minutes)
    if not result:
        return ordered[:1]
    return result
