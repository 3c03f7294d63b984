# app/core/pagination.py
from dataclasses import dataclass, field
from typing import Callable, Generic, List, Optional, TypeVar
import math

from app.core.result import ErrorKind, Result, ServiceError
from app.core.sort_by import SortBy

T = TypeVar("T")

@dataclass(frozen=True)
class PageResult(Generic[T]):
    """페이지 결과 (저장 안 함, 계산값)"""
    items: List[T] = field(default_factory=list)
    current_page: int = 0
    total_pages: int = 0
    total_items: int = 0
    page_size: int = 0
    has_next: bool = False
    has_previous: bool = False

    @property
    def offset(self) -> int:
        return self.current_page * self.page_size

def paginate(items: List[T], page: int, total_count: int, page_size: int) -> PageResult[T]:
    """
    페이지 메타데이터 계산

    items를 가져올 때 쓴 page_size / total_count를 그대로 넘겨야 한다.
    마지막 페이지는 page_size보다 작을 수 있어서 len(items)로는 계산하지 않는다.
    page는 0부터 시작.
    """
    if page_size <= 0:
        raise ValueError("page_size는 1 이상이어야 합니다")

    # 0건이면 0페이지 (1페이지 아님)
    total_pages = math.ceil(total_count / page_size) if total_count > 0 else 0

    return PageResult(
        items=list(items),
        current_page=page,
        total_pages=total_pages,
        total_items=total_count,
        page_size=page_size,
        has_next=page < total_pages - 1,
        has_previous=page > 0,
    )

def validate_page_request(page: int, size: int, max_size: int) -> Optional[ServiceError]:
    """페이지 요청 검증 (문제 없으면 None)"""
    if page < 0:
        return ServiceError(ErrorKind.VALIDATION, "page는 0 이상이어야 합니다")
    if size < 1 or size > max_size:
        return ServiceError(ErrorKind.VALIDATION, f"size는 1~{max_size} 사이여야 합니다")
    return None

def load_page(
    sort_by: Optional[str],
    page: int,
    size: int,
    max_size: int,
    fetch: Callable[[SortBy, int, int], List[T]],
    count: Callable[[], int],
) -> Result[PageResult[T]]:
    """
    정렬 기준/페이지 검증 → 개수 + 목록 조회 → 페이지 결과

    fetch(sort_by, offset, limit)와 count()는 같은 조건이어야 한다.
    검증에 실패하면 쿼리는 실행하지 않는다.
    """
    parsed = SortBy.parse(sort_by)
    if not parsed.ok:
        return Result.from_error(parsed.error)

    error = validate_page_request(page, size, max_size)
    if error:
        return Result.from_error(error)

    total = count()
    items = fetch(parsed.value, page * size, size)
    return Result.success(paginate(items, page, total, size))
