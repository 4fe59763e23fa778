"""
추천 서비스 계층.

- pipeline: 카탈로그 + 외부 팩 집계 → 효율 점수 재정렬 → 시간 예산 맞춤
- saved_routes: 저장된 경로 upsert / 삭제
- route_time: Google / Kakao / 더미 경로 소요 시간
"""
