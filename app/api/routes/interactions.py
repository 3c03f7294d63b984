# app/api/routes/interactions.py
from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from app.schemas.photo import LikeStatusResponse, PhotoListResponse
from app.api.deps import (
    Principal,
    get_current_principal,
    get_gallery_service,
    get_interaction_ledger,
    get_optional_principal,
)
from app.api.errors import unwrap
from app.api.presenters import to_summaries
from app.api.routes.photos import PAGE_QUERY, SIZE_QUERY, SORT_QUERY
from app.services.gallery_service import GalleryService
from app.services.interaction_service import InteractionLedger

# /photos/{photo_id} 보다 먼저 등록해야 /liked, /favorited가 잡힘
router = APIRouter(prefix="/api/v1/photos", tags=["좋아요/즐겨찾기"])

@router.get("/liked", response_model=PhotoListResponse)
def get_liked_photos(
    page: int = PAGE_QUERY,
    size: int = SIZE_QUERY,
    sort_by: str = SORT_QUERY,
    principal: Principal = Depends(get_current_principal),
    gallery: GalleryService = Depends(get_gallery_service),
    ledger: InteractionLedger = Depends(get_interaction_ledger)
):
    """내가 좋아요 누른 사진"""
    result = unwrap(ledger.liked_photos_of(principal.id, sort_by, page, size))
    return PhotoListResponse.from_page(result, to_summaries(result.items, principal.id, gallery, ledger))

@router.get("/favorited", response_model=PhotoListResponse)
def get_favorited_photos(
    page: int = PAGE_QUERY,
    size: int = SIZE_QUERY,
    sort_by: str = SORT_QUERY,
    principal: Principal = Depends(get_current_principal),
    gallery: GalleryService = Depends(get_gallery_service),
    ledger: InteractionLedger = Depends(get_interaction_ledger)
):
    """내 즐겨찾기 (본인만)"""
    result = unwrap(ledger.favorited_photos_of(principal.id, sort_by, page, size))
    return PhotoListResponse.from_page(result, to_summaries(result.items, principal.id, gallery, ledger))

@router.post("/{photo_id}/like", status_code=status.HTTP_201_CREATED)
def like_photo(
    photo_id: str,
    principal: Principal = Depends(get_current_principal),
    ledger: InteractionLedger = Depends(get_interaction_ledger)
):
    """좋아요"""
    unwrap(ledger.like(photo_id, principal.id))
    return Response(status_code=status.HTTP_201_CREATED)

@router.delete("/{photo_id}/like", status_code=status.HTTP_204_NO_CONTENT)
def unlike_photo(
    photo_id: str,
    principal: Principal = Depends(get_current_principal),
    ledger: InteractionLedger = Depends(get_interaction_ledger)
):
    """좋아요 취소"""
    unwrap(ledger.unlike(photo_id, principal.id))
    return None

@router.get("/{photo_id}/like-status", response_model=LikeStatusResponse)
def get_like_status(
    photo_id: str,
    principal: Optional[Principal] = Depends(get_optional_principal),
    gallery: GalleryService = Depends(get_gallery_service),
    ledger: InteractionLedger = Depends(get_interaction_ledger)
):
    """좋아요 수 + 내가 눌렀는지 (사진을 볼 수 있는 사람만)"""
    requester_id = principal.id if principal else None
    unwrap(gallery.get(photo_id, requester_id))
    like_count = unwrap(ledger.like_count(photo_id))
    is_liked = unwrap(ledger.is_liked_by(photo_id, requester_id))
    return LikeStatusResponse(photo_id=photo_id, like_count=like_count, is_liked=is_liked)

@router.post("/{photo_id}/favorite", status_code=status.HTTP_201_CREATED)
def favorite_photo(
    photo_id: str,
    principal: Principal = Depends(get_current_principal),
    ledger: InteractionLedger = Depends(get_interaction_ledger)
):
    """즐겨찾기"""
    unwrap(ledger.favorite(photo_id, principal.id))
    return Response(status_code=status.HTTP_201_CREATED)

@router.delete("/{photo_id}/favorite", status_code=status.HTTP_204_NO_CONTENT)
def unfavorite_photo(
    photo_id: str,
    principal: Principal = Depends(get_current_principal),
    ledger: InteractionLedger = Depends(get_interaction_ledger)
):
    """즐겨찾기 취소"""
    unwrap(ledger.unfavorite(photo_id, principal.id))
    return None
