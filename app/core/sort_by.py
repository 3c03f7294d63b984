# app/core/sort_by.py
import enum
from typing import Optional

from app.core.result import ErrorKind, Result

class SortBy(str, enum.Enum):
    """목록 정렬 기준 (이 4개 외에는 허용 안 함)"""
    NEWEST = "newest"                   # 최신순
    OLDEST = "oldest"                   # 오래된순
    MOST_LIKED = "mostLiked"            # 좋아요 많은순
    MOST_FAVORITED = "mostFavorited"    # 즐겨찾기 많은순

    @classmethod
    def allowed_values(cls) -> str:
        return ", ".join(item.value for item in cls)

    @classmethod
    def parse(cls, value: Optional[str]) -> Result["SortBy"]:
        """문자열 → SortBy (모르는 값은 기본값으로 바꾸지 않고 에러)"""
        for item in cls:
            if item.value == value:
                return Result.success(item)
        return Result.failure(
            ErrorKind.VALIDATION,
            f"지원하지 않는 정렬 기준입니다: {value}. 허용: {cls.allowed_values()}"
        )
