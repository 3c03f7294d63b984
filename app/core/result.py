# app/core/result.py
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar
import enum

T = TypeVar("T")

class ErrorKind(str, enum.Enum):
    """비즈니스 에러 종류 (호출자가 복구 가능한 것만)"""
    NOT_FOUND = "not_found"                  # 해당 id 없음
    UNAUTHORIZED = "unauthorized"            # 있지만 권한 없음
    INVALID_OPERATION = "invalid_operation"  # 비즈니스 규칙 위반
    CONFLICT = "conflict"                    # 중복
    VALIDATION = "validation"                # 잘못된 입력

@dataclass(frozen=True)
class ServiceError:
    """에러 종류 + 사용자에게 보여줄 메시지"""
    kind: ErrorKind
    message: str

@dataclass(frozen=True)
class Result(Generic[T]):
    """
    서비스 결과 (성공 값 또는 에러)

    비즈니스 규칙 위반은 예외 대신 Result로 돌려준다.
    DB 장애, 디스크 오류 같은 인프라 문제만 예외로 올라간다.
    """
    value: Optional[T] = None
    error: Optional[ServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "Result[T]":
        return cls(error=ServiceError(kind=kind, message=message))

    @classmethod
    def from_error(cls, error: ServiceError) -> "Result[T]":
        return cls(error=error)
