# app/api/presenters.py
from typing import List, Optional

from app.models.photo import Photo
from app.schemas.photo import PhotoSummary
from app.services.gallery_service import GalleryService
from app.services.interaction_service import InteractionLedger

UPLOAD_URL_PREFIX = "/uploads"

def photo_url(file_path: str) -> str:
    """저장 경로 → 정적 파일 URL"""
    return f"{UPLOAD_URL_PREFIX}/{file_path}"

def to_summaries(
    photos: List[Photo],
    requester_id: Optional[str],
    gallery: GalleryService,
    ledger: InteractionLedger
) -> List[PhotoSummary]:
    """
    사진 목록 → 응답

    소유자, 개수, 요청자의 좋아요/즐겨찾기 여부는 목록 전체를 한 번에 조회한다.
    """
    photo_ids = [photo.id for photo in photos]
    owners = gallery.photos.find_owners(photo.user_id for photo in photos)
    like_counts, favorite_counts = ledger.counts_for(photo_ids)
    liked_ids, favorited_ids = ledger.flags_for(requester_id, photo_ids)

    summaries = []
    for photo in photos:
        owner = owners.get(photo.user_id)
        summaries.append(PhotoSummary(
            id=photo.id,
            owner_id=photo.user_id,
            owner_name=owner.username if owner else None,
            title=photo.title,
            description=photo.description,
            file_path=photo.file_path,
            url=photo_url(photo.file_path),
            is_public=photo.is_public,
            upload_order=photo.upload_order,
            created_at=photo.created_at,
            updated_at=photo.updated_at,
            like_count=like_counts.get(photo.id, 0),
            favorite_count=favorite_counts.get(photo.id, 0),
            is_liked_by_user=photo.id in liked_ids,
            is_favorited_by_user=photo.id in favorited_ids,
        ))
    return summaries

def to_summary(
    photo: Photo,
    requester_id: Optional[str],
    gallery: GalleryService,
    ledger: InteractionLedger
) -> PhotoSummary:
    return to_summaries([photo], requester_id, gallery, ledger)[0]
