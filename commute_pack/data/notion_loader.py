from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional

import httpx

from .. import config
from ..exceptions import NotionConfigError, NotionFetchError
from ..models.data_models import ContentSection, LearningPack
from .preprocess import dedupe_tags, truncate

logger = logging.getLogger(__name__)

DEFAULT_SUMMARY = "Notion에서 가져온 학습 자료입니다. 실제 업무에 도움이 되는 내용들을 정리했어요."
BASE_TAGS = ["Notion", "업무자료"]

# 아이템 당 30초, 코드 블록 당 2분 가정
MINUTES_PER_ITEM = 0.5
MINUTES_PER_CODE = 2
MIN_PACK_MINUTES = 3
MAX_PACK_MINUTES = 30

_HEADINGS = ("heading_1", "heading_2", "heading_3")
_LIST_ITEMS = ("bulleted_list_item", "numbered_list_item")


# ------------------------------------------------------
# Notion 응답 → LearningPack 변환
# ------------------------------------------------------
def extract_text(rich_text: Any) -> str:
    if not rich_text or not isinstance(rich_text, list):
        return ""
    return "".join(item.get("plain_text", "") for item in rich_text)


def extract_title(page: Dict[str, Any]) -> str:
    for prop in (page.get("properties") or {}).values():
        if prop.get("type") == "title" and prop.get("title"):
            return extract_text(prop["title"])
    return "Untitled Page"


def transform_blocks(blocks: List[Dict[str, Any]]) -> List[ContentSection]:
    """
    블록 목록을 학습 카드 섹션으로 변환.
    - heading: 새 섹션 시작
    - list item / paragraph: 현재 섹션에 추가 (없으면 기본 섹션 생성)
    - code: 현재 섹션을 닫고 코드 섹션 추가
    """
    content: List[ContentSection] = []
    current: Optional[ContentSection] = None

    for block in blocks:
        btype = block.get("type")

        if btype in _HEADINGS:
            if current:
                content.append(current)
            current = ContentSection(type="section", title=extract_text(block[btype].get("rich_text")))

        elif btype in _LIST_ITEMS:
            text = extract_text(block[btype].get("rich_text"))
            if current:
                current.items.append(text)
            else:
                current = ContentSection(type="section", title="주요 내용", items=[text])

        elif btype == "code":
            if current:
                content.append(current)
            code = block["code"]
            caption = code.get("caption") or []
            content.append(
                ContentSection(
                    type="code",
                    title=extract_text(caption) if caption else "코드 예시",
                    content=extract_text(code.get("rich_text")),
                )
            )
            current = None

        elif btype == "paragraph":
            text = extract_text(block["paragraph"].get("rich_text"))
            if text.strip():
                if current:
                    current.items.append(text)
                else:
                    current = ContentSection(type="section", title="개요", items=[text])

    if current:
        content.append(current)
    return content


def generate_summary(content: List[ContentSection]) -> str:
    if content and content[0].items:
        return truncate(content[0].items[0], 150)
    return DEFAULT_SUMMARY


def estimate_minutes(content: List[ContentSection]) -> int:
    total_items = sum(len(c.items) for c in content if c.type == "section")
    total_code = sum(1 for c in content if c.type == "code")
    minutes = math.ceil(total_items * MINUTES_PER_ITEM + total_code * MINUTES_PER_CODE)
    return max(MIN_PACK_MINUTES, min(minutes, MAX_PACK_MINUTES))


def extract_tags(page: Dict[str, Any]) -> List[str]:
    tags = list(BASE_TAGS)
    for prop in (page.get("properties") or {}).values():
        if prop.get("type") == "multi_select" and prop.get("multi_select"):
            tags.extend(opt.get("name", "") for opt in prop["multi_select"])
        elif prop.get("type") == "select" and prop.get("select"):
            tags.append(prop["select"].get("name", ""))
    return dedupe_tags(tags)


def page_url(page: Dict[str, Any]) -> str:
    return f"https://notion.so/{str(page.get('id', '')).replace('-', '')}"


def page_to_pack(page_id: str, page: Dict[str, Any], blocks: List[Dict[str, Any]]) -> LearningPack:
    content = transform_blocks(blocks)
    return LearningPack(
        id=page_id,
        source="notion",
        source_label="Notion",
        title=extract_title(page) or "Untitled Page",
        summary=generate_summary(content),
        estimated_minutes=estimate_minutes(content),
        tags=extract_tags(page),
        url=page_url(page),
        content=content,
        last_modified=page.get("last_edited_time"),
    )


class NotionPackLoader:
    """
    Notion 페이지 하나를 LearningPack으로 가져오는 로더.
    client를 주입하지 않으면 호출마다 AsyncClient를 열고 닫는다.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
        version: Optional[str] = None,
    ):
        self.api_key = api_key if api_key is not None else config.NOTION_API_KEY
        self.client = client
        self.base_url = (base_url or config.NOTION_API_BASE).rstrip("/")
        self.version = version or config.NOTION_VERSION

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Notion-Version": self.version,
            "Content-Type": "application/json",
        }

    async def _get_json(self, client: httpx.AsyncClient, path: str, what: str) -> Dict[str, Any]:
        resp = await client.get(f"{self.base_url}{path}", headers=self._headers())
        if resp.status_code >= 400:
            raise NotionFetchError(f"Failed to fetch Notion {what}", status_code=resp.status_code)
        return resp.json()

    async def fetch_by_id(self, page_id: str) -> LearningPack:
        if not self.api_key:
            raise NotionConfigError("Notion API key not found")

        logger.info(f"[Notion] Fetching page: page_id={page_id}")
        if self.client is not None:
            page, blocks = await self._fetch(self.client, page_id)
        else:
            async with httpx.AsyncClient(timeout=config.HTTP_TIMEOUT_SECONDS) as client:
                page, blocks = await self._fetch(client, page_id)

        pack = page_to_pack(page_id, page, blocks)
        logger.info(f"[Notion] Page converted: title={pack.title}, minutes={pack.estimated_minutes}")
        return pack

    async def _fetch(self, client: httpx.AsyncClient, page_id: str):
        page = await self._get_json(client, f"/pages/{page_id}", "page")
        blocks = await self._get_json(client, f"/blocks/{page_id}/children", "blocks")
        return page, blocks.get("results") or []
