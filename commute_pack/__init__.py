# commute_pack/__init__.py

"""
출퇴근 학습팩 추천 패키지 루트.

- rule_based: 시간 예산 greedy 선택 + 학습 효율 점수
- service: 경로 기반 추천 파이프라인, 저장된 경로, 경로 소요 시간
- data: 기본 카탈로그, Notion 로더, key-value 저장소
"""
