# app/services/interaction_service.py
from typing import Dict, Iterable, Optional, Set, Tuple

from app.config import settings
from app.core.logger import logger
from app.core.pagination import PageResult, load_page
from app.core.result import ErrorKind, Result
from app.models.photo import Photo
from app.repositories.base import InteractionStore, PhotoStore
from app.services.authorization_service import AuthorizationGuard

class InteractionLedger:
    """
    좋아요 / 즐겨찾기 규칙

    좋아요 (공개적인 반응):
    - 비공개 사진 불가
    - 본인 사진 불가
    - 중복 불가

    즐겨찾기 (개인 북마크):
    - 본인 사진은 공개/비공개 상관없이 가능
    - 남의 비공개 사진은 불가
    - 중복 불가

    중복 체크는 먼저 조회로 하고, 동시에 들어온 요청은 DB 유니크 제약이
    막는다. 어느 쪽이든 CONFLICT로 돌려준다.
    """

    def __init__(
        self,
        photos: PhotoStore,
        likes: InteractionStore,
        favorites: InteractionStore,
        guard: AuthorizationGuard,
        max_page_size: Optional[int] = None,
    ):
        self.photos = photos
        self.likes = likes
        self.favorites = favorites
        self.guard = guard
        self.max_page_size = max_page_size or settings.max_page_size

    # ===== 좋아요 =====

    def like(self, photo_id: str, user_id: str) -> Result[None]:
        """좋아요 (검증 순서: 존재 → 공개 → 본인 아님 → 중복 아님)"""
        photo = self.photos.get(photo_id)
        if photo is None:
            return _photo_not_found(photo_id)

        if not photo.is_public:
            return Result.failure(ErrorKind.INVALID_OPERATION, "비공개 사진에는 좋아요를 누를 수 없습니다")

        if self.guard.is_owner(photo, user_id):
            return Result.failure(ErrorKind.INVALID_OPERATION, "본인 사진에는 좋아요를 누를 수 없습니다")

        if self.likes.exists(photo_id, user_id):
            return Result.failure(ErrorKind.CONFLICT, "이미 좋아요를 누른 사진입니다")
        if not self.likes.add(photo_id, user_id):
            return self._not_added(photo_id, "이미 좋아요를 누른 사진입니다")

        logger.info(f"✅ 좋아요: photo={photo_id}, user={user_id}")
        return Result.success()

    def unlike(self, photo_id: str, user_id: str) -> Result[None]:
        """좋아요 취소"""
        if not self.photos.exists(photo_id):
            return _photo_not_found(photo_id)

        if not self.likes.exists(photo_id, user_id) or not self.likes.remove(photo_id, user_id):
            return Result.failure(ErrorKind.INVALID_OPERATION, "좋아요를 누르지 않은 사진입니다")

        logger.info(f"✅ 좋아요 취소: photo={photo_id}, user={user_id}")
        return Result.success()

    # ===== 즐겨찾기 =====

    def favorite(self, photo_id: str, user_id: str) -> Result[None]:
        """즐겨찾기 (본인 사진은 비공개여도 가능)"""
        photo = self.photos.get(photo_id)
        if photo is None:
            return _photo_not_found(photo_id)

        if not self.guard.can_view(photo, user_id):
            return Result.failure(
                ErrorKind.INVALID_OPERATION,
                "다른 사람의 비공개 사진은 즐겨찾기할 수 없습니다"
            )

        if self.favorites.exists(photo_id, user_id):
            return Result.failure(ErrorKind.CONFLICT, "이미 즐겨찾기한 사진입니다")
        if not self.favorites.add(photo_id, user_id):
            return self._not_added(photo_id, "이미 즐겨찾기한 사진입니다")

        logger.info(f"✅ 즐겨찾기: photo={photo_id}, user={user_id}")
        return Result.success()

    def unfavorite(self, photo_id: str, user_id: str) -> Result[None]:
        """즐겨찾기 취소"""
        if not self.photos.exists(photo_id):
            return _photo_not_found(photo_id)

        if not self.favorites.exists(photo_id, user_id) or not self.favorites.remove(photo_id, user_id):
            return Result.failure(ErrorKind.INVALID_OPERATION, "즐겨찾기하지 않은 사진입니다")

        logger.info(f"✅ 즐겨찾기 취소: photo={photo_id}, user={user_id}")
        return Result.success()

    def _not_added(self, photo_id: str, duplicate_message: str) -> Result[None]:
        """저장소가 삽입을 거부함: 사진이 그 사이 지워졌으면 NOT_FOUND, 아니면 중복"""
        if not self.photos.exists(photo_id):
            return _photo_not_found(photo_id)
        return Result.failure(ErrorKind.CONFLICT, duplicate_message)

    # ===== 조회 =====

    def like_count(self, photo_id: str) -> Result[int]:
        if not self.photos.exists(photo_id):
            return _photo_not_found(photo_id)
        return Result.success(self.likes.count_for_photo(photo_id))

    def favorite_count(self, photo_id: str) -> Result[int]:
        if not self.photos.exists(photo_id):
            return _photo_not_found(photo_id)
        return Result.success(self.favorites.count_for_photo(photo_id))

    def is_liked_by(self, photo_id: str, user_id: Optional[str]) -> Result[bool]:
        """삭제된 사진이면 False가 아니라 NOT_FOUND"""
        if not self.photos.exists(photo_id):
            return _photo_not_found(photo_id)
        if user_id is None:
            return Result.success(False)
        return Result.success(self.likes.exists(photo_id, user_id))

    def is_favorited_by(self, photo_id: str, user_id: Optional[str]) -> Result[bool]:
        if not self.photos.exists(photo_id):
            return _photo_not_found(photo_id)
        if user_id is None:
            return Result.success(False)
        return Result.success(self.favorites.exists(photo_id, user_id))

    def counts_for(self, photo_ids: Iterable[str]) -> Tuple[Dict[str, int], Dict[str, int]]:
        """목록용 (좋아요 수, 즐겨찾기 수) 일괄 조회"""
        ids = list(photo_ids)
        return self.likes.counts_for_photos(ids), self.favorites.counts_for_photos(ids)

    def flags_for(self, user_id: Optional[str], photo_ids: Iterable[str]) -> Tuple[Set[str], Set[str]]:
        """목록용 (내가 좋아요 누른 id, 즐겨찾기한 id). 비로그인이면 둘 다 빈 집합"""
        if user_id is None:
            return set(), set()
        ids = list(photo_ids)
        return self.likes.existing_for(user_id, ids), self.favorites.existing_for(user_id, ids)

    def liked_photos_of(self, user_id: str, sort_by: Optional[str], page: int, size: int) -> Result[PageResult[Photo]]:
        """내가 좋아요 누른 사진"""
        return load_page(
            sort_by, page, size, self.max_page_size,
            fetch=lambda order, offset, limit: self.likes.list_photos_of(user_id, order, offset, limit),
            count=lambda: self.likes.count_photos_of(user_id),
        )

    def favorited_photos_of(self, user_id: str, sort_by: Optional[str], page: int, size: int) -> Result[PageResult[Photo]]:
        """내 즐겨찾기 (본인만 볼 수 있음)"""
        return load_page(
            sort_by, page, size, self.max_page_size,
            fetch=lambda order, offset, limit: self.favorites.list_photos_of(user_id, order, offset, limit),
            count=lambda: self.favorites.count_photos_of(user_id),
        )

def _photo_not_found(photo_id: str) -> Result:
    return Result.failure(ErrorKind.NOT_FOUND, f"사진을 찾을 수 없습니다: {photo_id}")
