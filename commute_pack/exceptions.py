from typing import Optional


class CommutePackError(Exception):
    """commute_pack 공통 예외"""


class NotionConfigError(CommutePackError):
    """Notion API 키가 설정되지 않은 경우"""


class NotionFetchError(CommutePackError):
    """Notion 페이지/블록 조회 실패 (upstream 상태 코드 포함)"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RouteLookupError(CommutePackError):
    """경로 API(Google/Kakao) 호출 실패"""
