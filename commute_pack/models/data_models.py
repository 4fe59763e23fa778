from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ContentSection:
    type: str  # "section" | "code"
    title: str
    items: List[str] = field(default_factory=list)
    content: Optional[str] = None

    def to_frontend_dict(self) -> Dict[str, Any]:
        if self.type == "code":
            return {"type": "code", "title": self.title, "content": self.content or ""}
        return {"type": "section", "title": self.title, "items": list(self.items)}


@dataclass
class LearningPack:
    id: str
    source: str  # "geeknews" | "docs" | "notion"
    source_label: str
    title: str
    summary: str
    estimated_minutes: int
    tags: List[str] = field(default_factory=list)
    url: Optional[str] = None
    content: List[ContentSection] = field(default_factory=list)
    last_modified: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        # 소요 시간이 0 이하인 팩은 선택 대상에서 제외
        return isinstance(self.estimated_minutes, int) and self.estimated_minutes > 0

    def to_frontend_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "source": self.source,
            "sourceLabel": self.source_label,
            "title": self.title,
            "summary": self.summary,
            "estimatedMinutes": self.estimated_minutes,
            "tags": list(self.tags),
            "url": self.url,
        }
        if self.content:
            data["content"] = [c.to_frontend_dict() for c in self.content]
        if self.last_modified:
            data["lastModified"] = self.last_modified
        return data


@dataclass
class RouteInfo:
    origin: str
    destination: str
    minutes: int
    mode: str = "transit"  # "transit" | "driving" | "walking"


@dataclass
class SavedRoute:
    id: str
    label: str
    origin: str
    destination: str
    last_calculated_minutes: int
    last_updated: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "origin": self.origin,
            "destination": self.destination,
            "lastCalculatedMinutes": self.last_calculated_minutes,
            "lastUpdated": self.last_updated,
        }

    @staticmethod
    def from_dict(doc: Dict[str, Any]) -> SavedRoute:
        return SavedRoute(
            id=str(doc["id"]),
            label=str(doc.get("label") or ""),
            origin=str(doc.get("origin") or ""),
            destination=str(doc.get("destination") or ""),
            last_calculated_minutes=int(doc.get("lastCalculatedMinutes") or 0),
            last_updated=str(doc.get("lastUpdated") or ""),
        )


@dataclass
class RouteStep:
    instruction: str
    duration: int
    distance: Optional[str] = None
    travel_mode: str = "TRANSIT"
    transit_details: Optional[Dict[str, Any]] = None

    def to_frontend_dict(self) -> Dict[str, Any]:
        return {
            "instruction": self.instruction,
            "duration": self.duration,
            "distance": self.distance,
            "travelMode": self.travel_mode,
            "transitDetails": self.transit_details,
        }


@dataclass
class TransitInfo:
    total_stops: int
    transfers: int
    main_line: str


@dataclass
class RouteEstimate:
    origin: str
    destination: str
    minutes: int
    duration_text: str
    distance_meters: int
    distance_text: str
    mode: str
    steps: List[RouteStep] = field(default_factory=list)
    transit_info: Optional[TransitInfo] = None
    provider: str = "google"
    last_updated: str = ""
    is_dummy: bool = False

    def to_route_info(self) -> RouteInfo:
        return RouteInfo(
            origin=self.origin,
            destination=self.destination,
            minutes=self.minutes,
            mode=self.mode,
        )

    def to_frontend_dict(self) -> Dict[str, Any]:
        transit = None
        if self.transit_info is not None:
            transit = {
                "totalStops": self.transit_info.total_stops,
                "transfers": self.transit_info.transfers,
                "mainLine": self.transit_info.main_line,
            }
        return {
            "origin": self.origin,
            "destination": self.destination,
            "duration": {"minutes": self.minutes, "text": self.duration_text},
            "distance": {"meters": self.distance_meters, "text": self.distance_text},
            "mode": self.mode,
            "steps": [s.to_frontend_dict() for s in self.steps],
            "transitInfo": transit,
            "provider": self.provider,
            "lastUpdated": self.last_updated,
            "isDummy": self.is_dummy,
        }
