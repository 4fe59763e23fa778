from __future__ import annotations

import logging
import math
import random
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx

from .. import config
from ..data.preprocess import strip_html
from ..exceptions import RouteLookupError
from ..models.data_models import RouteEstimate, RouteStep, TransitInfo

logger = logging.getLogger(__name__)

GOOGLE_DIRECTIONS_URL = "https://maps.googleapis.com/maps/api/directions/json"
KAKAO_GEOCODE_URL = "https://dapi.kakao.com/v2/local/search/keyword.json"
KAKAO_DIRECTIONS_URL = "https://apis-navi.kakaomobility.com/v1/waypoints/directions"

# 주요 지하철역 간 대략적인 소요 시간 (분)
COMMON_ROUTES: Dict[str, Dict[str, int]] = {
    "강남": {"잠실": 15, "홍대": 35, "건대": 25, "신촌": 30},
    "홍대": {"강남": 35, "잠실": 45, "건대": 20, "신촌": 10},
    "잠실": {"강남": 15, "홍대": 45, "건대": 30, "신촌": 40},
    "건대": {"강남": 25, "홍대": 20, "잠실": 30, "신촌": 25},
}
DEFAULT_DUMMY_MINUTES = 35
DUMMY_VARIATION = 5
DUMMY_MIN_MINUTES = 10

SUBWAY_LINES = [
    "1호선", "2호선", "3호선", "4호선", "5호선", "6호선", "7호선", "8호선", "9호선",
    "분당선", "신분당선", "경의중앙선", "공항철도",
]


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _km_text(meters: float) -> str:
    return f"{meters / 1000:.1f}km"


# ------------------------------------------------------
# 더미 경로 (API 키 없음 / 호출 실패 시)
# ------------------------------------------------------
def dummy_route(origin: str, destination: str, mode: str, rng: Optional[random.Random] = None) -> RouteEstimate:
    rng = rng or random.Random()

    minutes = DEFAULT_DUMMY_MINUTES
    for start, destinations in COMMON_ROUTES.items():
        if start in origin:
            for end, m in destinations.items():
                if end in destination:
                    minutes = m

    # ±5분 변동
    minutes = max(DUMMY_MIN_MINUTES, minutes + rng.randint(-DUMMY_VARIATION, DUMMY_VARIATION))
    line = rng.choice(SUBWAY_LINES)

    steps = [
        RouteStep(
            instruction=f"{origin}에서 지하철 탑승",
            duration=2,
            distance="0.1km",
            travel_mode="WALKING",
        ),
        RouteStep(
            instruction=f"지하철로 {destination} 방면 이동",
            duration=minutes - 4,
            distance=f"{minutes * 0.45:.1f}km",
            travel_mode="TRANSIT",
            transit_details={
                "line": line,
                "vehicle": "지하철",
                "departure": f"{origin}역",
                "arrival": f"{destination}역",
                "stops": minutes // 3,
            },
        ),
        RouteStep(
            instruction=f"{destination}역에서 하차 후 도보",
            duration=2,
            distance="0.1km",
            travel_mode="WALKING",
        ),
    ]

    return RouteEstimate(
        origin=origin,
        destination=destination,
        minutes=minutes,
        duration_text=f"약 {minutes}분",
        distance_meters=minutes * 500,
        distance_text=f"{minutes * 0.5:.1f}km",
        mode=mode,
        steps=steps,
        transit_info=TransitInfo(
            total_stops=minutes // 3,
            transfers=1 if minutes > 30 else 0,
            main_line=line,
        ),
        provider="dummy",
        last_updated=_now_iso(),
        is_dummy=True,
    )


# ------------------------------------------------------
# Google Directions 응답 파싱
# ------------------------------------------------------
def _transit_details(step: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    details = step.get("transit_details")
    if not details:
        return None
    line = details.get("line") or {}
    return {
        "line": line.get("name") or line.get("short_name"),
        "vehicle": (line.get("vehicle") or {}).get("name"),
        "departure": (details.get("departure_stop") or {}).get("name"),
        "arrival": (details.get("arrival_stop") or {}).get("name"),
        "stops": details.get("num_stops"),
    }


def extract_transit_info(leg: Dict[str, Any]) -> TransitInfo:
    transit_steps = [s for s in leg.get("steps", []) if s.get("travel_mode") == "TRANSIT"]
    total_stops = sum((s.get("transit_details") or {}).get("num_stops") or 0 for s in transit_steps)
    main_line = "Unknown"
    if transit_steps:
        main_line = ((transit_steps[0].get("transit_details") or {}).get("line") or {}).get("name") or "Unknown"
    return TransitInfo(
        total_stops=total_stops,
        transfers=len(transit_steps) - 1,
        main_line=main_line,
    )


def parse_google_route(data: Dict[str, Any], mode: str) -> Optional[RouteEstimate]:
    if data.get("status") != "OK" or not data.get("routes"):
        return None

    leg = data["routes"][0]["legs"][0]
    steps = [
        RouteStep(
            instruction=strip_html(s.get("html_instructions", "")),
            duration=math.ceil(s["duration"]["value"] / 60),
            distance=(s.get("distance") or {}).get("text"),
            travel_mode=s.get("travel_mode", ""),
            transit_details=_transit_details(s),
        )
        for s in leg.get("steps", [])
    ]

    return RouteEstimate(
        origin=leg.get("start_address", ""),
        destination=leg.get("end_address", ""),
        minutes=math.ceil(leg["duration"]["value"] / 60),
        duration_text=leg["duration"].get("text", ""),
        distance_meters=leg["distance"]["value"],
        distance_text=leg["distance"].get("text", ""),
        mode=mode,
        steps=steps,
        transit_info=extract_transit_info(leg),
        provider="google",
        last_updated=_now_iso(),
    )


# ------------------------------------------------------
# Kakao Mobility 응답 파싱 (자동차 전용)
# ------------------------------------------------------
def parse_kakao_route(data: Dict[str, Any], origin: str, destination: str) -> Optional[RouteEstimate]:
    routes = data.get("routes") or []
    if not routes or not routes[0].get("summary"):
        return None

    route = routes[0]
    summary = route["summary"]
    seconds = summary.get("duration") or 0
    meters = summary.get("distance") or 0
    minutes = math.ceil(seconds / 60)

    steps: List[RouteStep] = []
    guides = [g for section in route.get("sections") or [] for g in section.get("guides") or []]
    for idx, guide in enumerate(guides):
        steps.append(
            RouteStep(
                instruction=guide.get("guidance") or guide.get("name") or f"안내 {idx + 1}",
                duration=math.ceil(guide["duration"] / 60) if guide.get("duration") else 0,
                distance=_km_text(guide["distance"]) if guide.get("distance") else None,
                travel_mode="DRIVING",
            )
        )

    return RouteEstimate(
        origin=(summary.get("origin") or {}).get("name") or origin,
        destination=(summary.get("destination") or {}).get("name") or destination,
        minutes=minutes,
        duration_text=f"약 {minutes}분",
        distance_meters=meters,
        distance_text=_km_text(meters),
        mode="driving",
        steps=steps,
        transit_info=None,
        provider="kakao",
        last_updated=_now_iso(),
    )


class RouteTimeService:
    """
    출발지/도착지 → 예상 이동 시간.
    Kakao(요청 시) → Google → 더미 순서로 시도하며, 실패해도 더미 결과를 돌려준다.
    """

    def __init__(
        self,
        google_api_key: Optional[str] = None,
        kakao_api_key: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        rng: Optional[random.Random] = None,
    ):
        self.google_api_key = google_api_key if google_api_key is not None else config.GOOGLE_MAPS_API_KEY
        self.kakao_api_key = kakao_api_key if kakao_api_key is not None else config.KAKAO_REST_API_KEY
        self.client = client
        self.rng = rng or random.Random()

    async def estimate(
        self,
        origin: str,
        destination: str,
        mode: str = "transit",
        provider: str = "google",
    ) -> RouteEstimate:
        logger.info(f"[RouteTime] {origin} → {destination} (mode={mode}, provider={provider})")
        try:
            if self.client is not None:
                return await self._estimate(self.client, origin, destination, mode, provider)
            async with httpx.AsyncClient(timeout=config.HTTP_TIMEOUT_SECONDS) as client:
                return await self._estimate(client, origin, destination, mode, provider)
        except Exception as e:
            logger.error(f"[RouteTime] Error fetching route data: {e!r}")
            return dummy_route(origin, destination, mode, self.rng)

    async def _estimate(
        self,
        client: httpx.AsyncClient,
        origin: str,
        destination: str,
        mode: str,
        provider: str,
    ) -> RouteEstimate:
        if provider == "kakao" and self.kakao_api_key:
            kakao = await self._kakao_route(client, origin, destination)
            if kakao:
                return kakao

        if not self.google_api_key:
            return dummy_route(origin, destination, mode, self.rng)

        resp = await client.get(
            GOOGLE_DIRECTIONS_URL,
            params={
                "origin": origin,
                "destination": destination,
                "mode": mode,
                "key": self.google_api_key,
                "language": "ko",
                "region": "KR",
            },
        )
        if resp.status_code >= 400:
            raise RouteLookupError(f"Google Maps API error: {resp.status_code}")

        route = parse_google_route(resp.json(), mode)
        if route is None:
            logger.warning("[RouteTime] Google returned no routes, using dummy data")
            return dummy_route(origin, destination, mode, self.rng)
        return route

    async def _geocode(self, client: httpx.AsyncClient, query: str) -> Dict[str, Any]:
        resp = await client.get(
            KAKAO_GEOCODE_URL,
            params={"query": query, "size": 1},
            headers={"Authorization": f"KakaoAK {self.kakao_api_key}"},
        )
        if resp.status_code >= 400:
            raise RouteLookupError(f"Kakao geocode error: {resp.status_code}")

        docs = resp.json().get("documents") or []
        if not docs:
            raise RouteLookupError("No Kakao geocode results")
        doc = docs[0]
        return {"x": float(doc["x"]), "y": float(doc["y"]), "name": doc.get("place_name") or query}

    async def _kakao_route(self, client: httpx.AsyncClient, origin: str, destination: str) -> Optional[RouteEstimate]:
        start = await self._geocode(client, origin)
        end = await self._geocode(client, destination)

        body = {
            "origin": {"x": start["x"], "y": start["y"]},
            "destination": {"x": end["x"], "y": end["y"]},
            "waypoints": [],
            "priority": "TIME",
            "alternatives": False,
            "road_details": False,
            "summary": True,
        }
        resp = await client.post(
            KAKAO_DIRECTIONS_URL,
            json=body,
            headers={"Authorization": f"KakaoAK {self.kakao_api_key}"},
        )
        if resp.status_code >= 400:
            raise RouteLookupError(f"Kakao route error: {resp.status_code}")

        return parse_kakao_route(resp.json(), origin, destination)
