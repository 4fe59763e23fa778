from .data_models import (
    ContentSection,
    LearningPack,
    RouteEstimate,
    RouteInfo,
    RouteStep,
    SavedRoute,
    TransitInfo,
)

__all__ = [
    "ContentSection",
    "LearningPack",
    "RouteEstimate",
    "RouteInfo",
    "RouteStep",
    "SavedRoute",
    "TransitInfo",
]
