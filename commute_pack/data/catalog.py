from typing import Tuple

from ..models.data_models import LearningPack

# 기본 학습팩 카탈로그 (읽기 전용)
BASE_PACKS: Tuple[LearningPack, ...] = (
    LearningPack(
        id="gn-1",
        source="geeknews",
        source_label="GeekNews",
        title="React 19에서 바뀌는 것들 정리",
        summary=(
            "올해 React 19 릴리즈에서 바뀌는 주요 포인트를 한 번에 정리한 글입니다. "
            "concurrent features, actions, form 처리 등 실제 업무에 영향을 줄 만한 내용을 빠르게 훑어볼 수 있어요."
        ),
        estimated_minutes=7,
        tags=["React", "업무연결"],
        url="https://news.hada.io",
    ),
    LearningPack(
        id="docs-1",
        source="docs",
        source_label="Docs",
        title="React 공식 문서 - Thinking in React",
        summary=(
            "React 방식으로 컴포넌트를 쪼개고, 상태를 어디에 둘지 결정하는 과정을 단계별로 설명합니다. "
            "실제로 지금 하고 있는 컴포넌트 구조를 떠올리면서 읽어보면 좋아요."
        ),
        estimated_minutes=10,
        tags=["React", "공식문서"],
        url="https://react.dev/learn/thinking-in-react",
    ),
    LearningPack(
        id="notion-1",
        source="notion",
        source_label="업무 로그",
        title="최근 작업한 i18n 이슈 복습",
        summary=(
            "최근 Notion 업무일지에서 언급된 다국어(i18n) 관련 이슈를 기반으로, "
            "다시 보면 좋을만한 레퍼런스와 체크리스트를 묶어둔 카드입니다. "
            "다음 번 이슈 때 더 빠르게 대응할 수 있도록 돕습니다."
        ),
        estimated_minutes=6,
        tags=["i18n", "업무복습"],
    ),
    LearningPack(
        id="docs-2",
        source="docs",
        source_label="Docs",
        title="TypeScript Handbook - Generics 개념 잡기",
        summary=(
            "제네릭 타입의 기본 개념과 실제 코드에서 어떻게 사용하는지 예제로 설명합니다. "
            "복잡한 유틸 타입을 읽을 때 막혔던 부분을 해소하는 데 도움이 됩니다."
        ),
        estimated_minutes=8,
        tags=["TypeScript", "기초다지기"],
        url="https://www.typescriptlang.org/docs/handbook/2/generics.html",
    ),
)


def get_base_catalog() -> Tuple[LearningPack, ...]:
    return BASE_PACKS
