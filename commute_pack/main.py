import asyncio

from .interface.recommend import recommend_packs, recommend_route_packs
from .models.data_models import RouteInfo


def demo_learning_packs(minutes: int = 25):
    print(f"=== {minutes}분 학습팩 추천 (Catalog) ===")
    for p in recommend_packs(minutes):
        print(f"{p['title']} ({p['estimatedMinutes']}분, {p['sourceLabel']})")


def demo_route_packs(minutes: int = 35):
    print(f"=== 강남 → 잠실 {minutes}분 학습팩 추천 (Catalog + Notion) ===")
    route = RouteInfo(origin="강남", destination="잠실", minutes=minutes)
    for p in asyncio.run(recommend_route_packs(route)):
        print(f"{p['title']} ({p['estimatedMinutes']}분, tags={p['tags']})")


if __name__ == "__main__":
    demo_learning_packs(minutes=15)
    demo_route_packs(minutes=35)
