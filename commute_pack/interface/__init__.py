from .recommend import recommend_packs, recommend_route_packs
from .api_interface import (
    clamp_minutes,
    delete_saved_route,
    get_learning_packs,
    get_notion_pack,
    get_route_packs,
    get_route_time,
    get_saved_routes,
    save_route,
)

__all__ = [
    "recommend_packs",
    "recommend_route_packs",
    "clamp_minutes",
    "get_learning_packs",
    "get_route_packs",
    "get_notion_pack",
    "get_route_time",
    "get_saved_routes",
    "save_route",
    "delete_saved_route",
]
