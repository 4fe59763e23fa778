import re
from typing import Iterable, List

_HTML_TAG = re.compile(r"<[^>]*>")


def normalize_text(text: str) -> str:
    if not text:
        return ""
    return text.strip()


def dedupe_tags(tags: Iterable[str]) -> List[str]:
    # 처음 등장한 순서를 유지하면서 중복 제거
    seen = set()
    result = []
    for t in tags:
        t = normalize_text(t)
        if t and t not in seen:
            seen.add(t)
            result.append(t)
    return result


def strip_html(text: str) -> str:
    return _HTML_TAG.sub("", text or "")


def truncate(text: str, limit: int = 150) -> str:
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text
