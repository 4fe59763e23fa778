"""
출퇴근 학습팩 추천 서버 - FastAPI 메인 파일.

이동 시간(직접 입력 또는 경로 계산)에 맞는 학습팩 추천 API를 제공합니다.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from commute_pack import config
from commute_pack.exceptions import NotionConfigError, NotionFetchError
from commute_pack.interface.api_interface import (
    delete_saved_route,
    get_learning_packs,
    get_notion_pack,
    get_route_packs,
    get_route_time,
    get_saved_routes,
    save_route,
)

# 로깅 설정
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

SERVICE_VERSION = "1.0.0"


# --- Schemas (프론트 형식에 맞춤: camelCase) ---


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContentSectionSchema(CamelModel):
    type: str
    title: str
    items: Optional[List[str]] = None
    content: Optional[str] = None


class LearningPackSchema(CamelModel):
    """개별 학습팩"""
    id: str
    source: str
    source_label: str
    title: str
    summary: str
    estimated_minutes: int
    tags: List[str] = []
    url: Optional[str] = None
    content: Optional[List[ContentSectionSchema]] = None
    last_modified: Optional[str] = None


class LearningPackResponse(CamelModel):
    """시간 기반 추천 응답"""
    minutes: int
    count: int
    packs: List[LearningPackSchema]
    timestamp: str


class RouteSchema(CamelModel):
    origin: str
    destination: str
    minutes: int
    mode: str


class RoutePackRequest(CamelModel):
    """경로 기반 추천 요청"""
    origin: str = ""
    destination: str = ""
    minutes: float = Field(..., description="경로 소요 시간(분)")
    mode: str = Field("transit", pattern="^(transit|driving|walking)$")
    external_pack_ids: List[str] = []


class RoutePackResponse(CamelModel):
    """경로 기반 추천 응답"""
    route: RouteSchema
    count: int
    packs: List[LearningPackSchema]
    timestamp: str


class SavedRouteSchema(CamelModel):
    id: str
    label: str
    origin: str
    destination: str
    last_calculated_minutes: int
    last_updated: str


class SavedRouteRequest(CamelModel):
    """저장 경로 upsert 요청"""
    label: str
    origin: str
    destination: str
    last_calculated_minutes: int = Field(..., ge=0)


class SavedRouteResponse(CamelModel):
    route: SavedRouteSchema
    count: int


class SavedRouteListResponse(CamelModel):
    count: int
    routes: List[SavedRouteSchema]


class HealthResponse(BaseModel):
    """헬스 체크 응답"""
    status: str
    service: str
    version: str


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


# --- Lifespan ---


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 시작 및 종료"""
    logger.info("[Startup] Commute Pack Server starting...")

    # 카탈로그 워밍업 (저장소 접근 없음)
    try:
        get_learning_packs(minutes=1)
        logger.info("[Startup] Learning pack catalog ready")
    except Exception as e:
        logger.warning(f"[Startup] Warmup failed (will retry on first request): {e}")

    yield

    logger.info("[Shutdown] Commute Pack Server shutting down...")


app = FastAPI(
    title="Commute Pack Server",
    description="이동 시간에 맞춘 학습팩 추천 API",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)


# --- API Endpoints ---


@app.get("/")
def root():
    """루트 엔드포인트"""
    return {
        "message": "Commute Pack Server",
        "version": SERVICE_VERSION,
        "endpoints": [
            "/health",
            "/learning-packs",
            "/learning-packs/route",
            "/notion",
            "/route-time",
            "/saved-routes",
        ],
    }


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """헬스 체크"""
    return HealthResponse(
        status="ok",
        service="commute-pack",
        version=SERVICE_VERSION,
    )


@app.get("/learning-packs", response_model=LearningPackResponse)
def learning_packs(
    minutes: Optional[str] = Query(None, description="사용 가능한 시간(분), 없거나 잘못되면 25분"),
):
    """
    시간 기반 추천.

    짧은 학습팩부터 채워 넣어 주어진 시간 안에 끝낼 수 있는 것만 고릅니다.
    """
    logger.info(f"[API] Learning packs: minutes={minutes}")
    result = get_learning_packs(minutes)
    logger.info(f"[API] Returned {result['count']} packs for {result['minutes']} minutes")
    return {**result, "timestamp": _timestamp()}


@app.post("/learning-packs/route", response_model=RoutePackResponse)
async def route_learning_packs(request: RoutePackRequest):
    """
    경로 기반 추천.

    1. 카탈로그에서 경로 시간에 맞는 기본 팩 선택
    2. externalPackIds(Notion 페이지)를 동시에 조회 (실패한 페이지는 제외)
    3. 학습 효율 점수로 재정렬 후 다시 시간에 맞춤
    """
    logger.info(
        f"[API] Route packs: {request.origin} → {request.destination}, "
        f"minutes={request.minutes}, external={len(request.external_pack_ids)}"
    )
    result = await get_route_packs(
        origin=request.origin,
        destination=request.destination,
        minutes=request.minutes,
        mode=request.mode,
        external_pack_ids=request.external_pack_ids,
    )
    logger.info(f"[API] Returned {result['count']} route packs")
    return {**result, "timestamp": _timestamp()}


@app.get("/notion", response_model=LearningPackSchema)
async def notion_pack(
    page_id: Optional[str] = Query(None, alias="pageId", description="Notion 페이지 ID"),
):
    """Notion 페이지 하나를 학습팩 형태로 변환"""
    if not config.NOTION_API_KEY:
        logger.error("[API] Notion API key not configured")
        raise HTTPException(status_code=500, detail="Notion API key not found")
    if not page_id:
        raise HTTPException(status_code=400, detail="Page ID is required")

    try:
        return await get_notion_pack(page_id)
    except NotionConfigError as e:
        logger.error(f"[API] Notion config error: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    except NotionFetchError as e:
        logger.error(f"[API] Notion fetch error: {e} (status={e.status_code})")
        raise HTTPException(status_code=e.status_code or 502, detail=str(e))
    except Exception as e:
        logger.error(f"[API] Error fetching Notion data: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.get("/route-time")
async def route_time(
    origin: Optional[str] = Query(None, description="출발지"),
    destination: Optional[str] = Query(None, description="도착지"),
    mode: str = Query("transit", pattern="^(transit|driving|walking)$"),
    provider: str = Query("google", pattern="^(google|kakao)$"),
):
    """
    경로 소요 시간 계산.

    API 키가 없거나 호출이 실패하면 더미 데이터(isDummy=true)를 반환합니다.
    """
    if not origin or not destination:
        raise HTTPException(status_code=400, detail="Origin and destination are required")

    logger.info(f"[API] Route time: {origin} → {destination} (mode={mode}, provider={provider})")
    return await get_route_time(origin, destination, mode=mode, provider=provider)


@app.get("/saved-routes", response_model=SavedRouteListResponse)
def list_saved_routes():
    """저장된 경로 목록"""
    return get_saved_routes()


@app.put("/saved-routes/{route_id}", response_model=SavedRouteResponse)
def upsert_saved_route(route_id: str, request: SavedRouteRequest):
    """저장된 경로 추가 또는 갱신 (같은 id면 제자리 교체)"""
    logger.info(f"[API] Upsert saved route: id={route_id}, label={request.label}")
    return save_route(
        route_id=route_id,
        label=request.label,
        origin=request.origin,
        destination=request.destination,
        last_calculated_minutes=request.last_calculated_minutes,
    )


@app.delete("/saved-routes/{route_id}", response_model=SavedRouteListResponse)
def remove_saved_route(route_id: str):
    """저장된 경로 삭제 (없으면 그대로)"""
    logger.info(f"[API] Delete saved route: id={route_id}")
    return delete_saved_route(route_id)


# ---------- 로컬 실행 ----------

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "server:app",
        host=config.API_HOST,
        port=config.API_PORT,
        reload=config.API_RELOAD,
    )
