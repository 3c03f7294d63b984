# app/services/authorization_service.py
from typing import Optional

from app.core.result import ErrorKind, Result
from app.models.photo import Photo

# 수정 계열 동작 이름 (에러 메시지용)
ACTION_LABELS = {
    "update": "수정",
    "delete": "삭제",
    "toggle_privacy": "공개 설정 변경",
}

class AuthorizationGuard:
    """
    사진 접근 권한 판단 (부수효과 없음)

    - 보기: 공개 사진이거나 본인 사진
    - 수정/삭제/공개 전환: 본인만
    """

    def is_owner(self, photo: Photo, user_id: Optional[str]) -> bool:
        return user_id is not None and photo.user_id == user_id

    def can_view(self, photo: Photo, requester_id: Optional[str]) -> bool:
        """비로그인(None)은 공개 사진만"""
        return bool(photo.is_public) or self.is_owner(photo, requester_id)

    def can_mutate(self, photo: Photo, requester_id: Optional[str]) -> bool:
        return self.is_owner(photo, requester_id)

    def check_view(self, photo: Optional[Photo], requester_id: Optional[str], photo_id: str) -> Result[Photo]:
        """없으면 NOT_FOUND, 있는데 못 보면 UNAUTHORIZED"""
        if photo is None:
            return Result.failure(ErrorKind.NOT_FOUND, f"사진을 찾을 수 없습니다: {photo_id}")
        if not self.can_view(photo, requester_id):
            return Result.failure(
                ErrorKind.UNAUTHORIZED,
                "비공개 사진입니다. 비공개 사진은 소유자만 볼 수 있습니다"
            )
        return Result.success(photo)

    def check_mutate(
        self,
        photo: Optional[Photo],
        requester_id: Optional[str],
        photo_id: str,
        action: str,
    ) -> Result[Photo]:
        if photo is None:
            return Result.failure(ErrorKind.NOT_FOUND, f"사진을 찾을 수 없습니다: {photo_id}")
        if not self.can_mutate(photo, requester_id):
            label = ACTION_LABELS.get(action, action)
            return Result.failure(
                ErrorKind.UNAUTHORIZED,
                f"{label} 권한이 없습니다. 사진 소유자만 {label}할 수 있습니다"
            )
        return Result.success(photo)
