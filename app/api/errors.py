# app/api/errors.py
from typing import TypeVar

from fastapi import HTTPException, status

from app.core.result import ErrorKind, Result

T = TypeVar("T")

# 에러 종류 → HTTP 상태 코드
STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorKind.INVALID_OPERATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
}

def unwrap(result: Result[T]) -> T:
    """성공이면 값, 실패면 HTTPException"""
    if result.ok:
        return result.value
    raise HTTPException(
        status_code=STATUS_BY_KIND[result.error.kind],
        detail=result.error.message
    )
