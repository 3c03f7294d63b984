# app/services/gallery_service.py
from typing import Optional

from fastapi import UploadFile

from app.config import settings
from app.core.logger import logger
from app.core.pagination import PageResult, load_page
from app.core.result import ErrorKind, Result, ServiceError
from app.models.photo import Photo
from app.repositories.base import FileStore, PhotoStore
from app.schemas.photo import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH, PhotoUpdate
from app.services.authorization_service import AuthorizationGuard

class GalleryService:
    """
    갤러리 사진 업로드/조회/수정/삭제

    권한 판단은 AuthorizationGuard, 파일은 FileStore, DB는 PhotoStore에 맡긴다.
    """

    def __init__(
        self,
        photos: PhotoStore,
        files: FileStore,
        guard: AuthorizationGuard,
        max_page_size: Optional[int] = None,
    ):
        self.photos = photos
        self.files = files
        self.guard = guard
        self.max_page_size = max_page_size or settings.max_page_size

    def upload(
        self,
        upload: Optional[UploadFile],
        owner_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        is_public: Optional[bool] = None,
    ) -> Result[Photo]:
        """
        사진 업로드

        1. 파일 검증
        2. 경로 없이 DB 저장 → id 발급
        3. id로 파일명 만들어서 디스크 저장
        4. 경로 저장

        2단계 이후 실패하면 행과 파일을 지우고 예외를 다시 올린다.
        """
        error = self.files.validate(upload) or _check_metadata(title, description)
        if error:
            logger.debug(f"업로드 거부 (user {owner_id}): {error.message}")
            return Result.from_error(error)

        photo = Photo(
            user_id=owner_id,
            file_path="",
            title=title,
            description=description,
            is_public=bool(is_public) if is_public is not None else False,  # 기본 비공개
            upload_order=self.photos.next_upload_order(owner_id),
        )
        photo = self.photos.add(photo)
        photo_id = photo.id

        file_path = None
        try:
            file_path = self.files.save(upload, owner_id, photo_id)
            photo.file_path = file_path
            photo = self.photos.save(photo)
        except Exception:
            # 반쯤 끝난 업로드 (빈 경로 행, 고아 파일)가 남지 않도록 정리 후 그대로 올림
            logger.error(f"업로드 실패, 정리: photo {photo_id}")
            self._discard_upload(photo_id, file_path)
            raise

        logger.info(f"✅ 사진 업로드 완료: {photo_id} (user {owner_id})")
        return Result.success(photo)

    def _discard_upload(self, photo_id: str, file_path: Optional[str]) -> None:
        if file_path:
            self.files.delete(file_path)
        photo = self.photos.get(photo_id)
        if photo is not None:
            self.photos.delete(photo)

    def get(self, photo_id: str, requester_id: Optional[str]) -> Result[Photo]:
        """사진 조회 (공개 또는 본인)"""
        return self.guard.check_view(self.photos.get(photo_id), requester_id, photo_id)

    def update(self, photo_id: str, requester_id: str, changes: PhotoUpdate) -> Result[Photo]:
        """사진 정보 수정 (본인만, 보낸 필드만 반영)"""
        checked = self.guard.check_mutate(self.photos.get(photo_id), requester_id, photo_id, "update")
        if not checked.ok:
            return checked

        values = changes.changes()
        error = _check_metadata(values.get("title"), values.get("description"))
        if error:
            return Result.from_error(error)

        photo = checked.value
        for name, value in values.items():
            setattr(photo, name, value)
        photo = self.photos.save(photo)

        logger.info(f"✅ 사진 수정: {photo_id} by user {requester_id} ({', '.join(values) or '변경 없음'})")
        return Result.success(photo)

    def toggle_privacy(self, photo_id: str, requester_id: str) -> Result[Photo]:
        """공개 ↔ 비공개 전환 (본인만)"""
        checked = self.guard.check_mutate(
            self.photos.get(photo_id), requester_id, photo_id, "toggle_privacy"
        )
        if not checked.ok:
            return checked

        photo = checked.value
        photo.toggle_privacy()
        photo = self.photos.save(photo)

        logger.info(f"✅ 공개 설정 변경: {photo_id} is_public={photo.is_public}")
        return Result.success(photo)

    def delete(self, photo_id: str, requester_id: str) -> Result[None]:
        """사진 삭제 (파일 → DB 순서, 좋아요/즐겨찾기도 함께 삭제)"""
        checked = self.guard.check_mutate(self.photos.get(photo_id), requester_id, photo_id, "delete")
        if not checked.ok:
            return Result.from_error(checked.error)

        photo = checked.value
        self.files.delete(photo.file_path)
        self.photos.delete(photo)

        logger.info(f"✅ 사진 삭제: {photo_id} by user {requester_id}")
        return Result.success()

    def list_my_photos(self, owner_id: str, sort_by: Optional[str], page: int, size: int) -> Result[PageResult[Photo]]:
        """내 사진 (공개 + 비공개)"""
        return load_page(
            sort_by, page, size, self.max_page_size,
            fetch=lambda order, offset, limit: self.photos.list_by_owner(owner_id, order, offset, limit),
            count=lambda: self.photos.count_by_owner(owner_id),
        )

    def list_public_photos(self, sort_by: Optional[str], page: int, size: int) -> Result[PageResult[Photo]]:
        """전체 공개 사진"""
        return load_page(
            sort_by, page, size, self.max_page_size,
            fetch=self.photos.list_public,
            count=self.photos.count_public,
        )

    def list_user_public_photos(
        self, owner_id: str, sort_by: Optional[str], page: int, size: int
    ) -> Result[PageResult[Photo]]:
        """특정 유저의 공개 사진"""
        return load_page(
            sort_by, page, size, self.max_page_size,
            fetch=lambda order, offset, limit: self.photos.list_public_by_owner(owner_id, order, offset, limit),
            count=lambda: self.photos.count_public_by_owner(owner_id),
        )

def _check_metadata(title: Optional[str], description: Optional[str]) -> Optional[ServiceError]:
    """제목/설명 길이 검증"""
    if title is not None and len(title) > TITLE_MAX_LENGTH:
        return ServiceError(ErrorKind.VALIDATION, f"제목은 {TITLE_MAX_LENGTH}자 이하여야 합니다")
    if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
        return ServiceError(ErrorKind.VALIDATION, f"설명은 {DESCRIPTION_MAX_LENGTH}자 이하여야 합니다")
    return None
