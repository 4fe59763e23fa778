from typing import Dict, Tuple

from ..models.data_models import LearningPack

# Tag Definitions
TAG_WORK_RELEVANCE = "업무연결"
TAG_FUNDAMENTALS = "기초다지기"
TAG_OFFICIAL_DOCS = "공식문서"

# Weight Definitions (0.1점 단위 정수, float 합산 오차로 동점이 깨지지 않게)
SCORE_SCALE = 10
BASE_SCORE = 10
W_WORK_RELEVANCE = 3
W_FUNDAMENTALS = 2
W_OFFICIAL_DOCS = 2
W_SHORT_WINDOW = 2  # 5~15분
W_MEDIUM_WINDOW = 1  # 16~25분


# Tag Score

def _tag_bonus(pack: LearningPack) -> int:
    tags = set(pack.tags)
    bonus = 0
    if TAG_WORK_RELEVANCE in tags:
        bonus += W_WORK_RELEVANCE
    if TAG_FUNDAMENTALS in tags:
        bonus += W_FUNDAMENTALS
    if TAG_OFFICIAL_DOCS in tags:
        bonus += W_OFFICIAL_DOCS
    return bonus


# Time Score

def _time_bonus(pack: LearningPack) -> int:
    minutes = pack.estimated_minutes
    if 5 <= minutes <= 15:
        return W_SHORT_WINDOW
    if 16 <= minutes <= 25:
        return W_MEDIUM_WINDOW
    return 0


# Total Score

def score_units(pack: LearningPack) -> int:
    """정렬용 정수 점수 (0.1점 단위)."""
    return BASE_SCORE + _tag_bonus(pack) + _time_bonus(pack)


def compute_efficiency_score(pack: LearningPack) -> Tuple[float, Dict[str, float]]:
    s_tag = _tag_bonus(pack)
    s_time = _time_bonus(pack)

    total = (BASE_SCORE + s_tag + s_time) / SCORE_SCALE

    return total, {
        "base": BASE_SCORE / SCORE_SCALE,
        "tag": s_tag / SCORE_SCALE,
        "time": s_time / SCORE_SCALE,
    }
