# app/api/routes/photos.py
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from app.config import settings
from app.schemas.photo import PhotoListResponse, PhotoSummary, PhotoUpdate
from app.api.deps import (
    Principal,
    get_current_principal,
    get_gallery_service,
    get_interaction_ledger,
    get_optional_principal,
)
from app.api.errors import unwrap
from app.api.presenters import to_summaries, to_summary
from app.services.gallery_service import GalleryService
from app.services.interaction_service import InteractionLedger

router = APIRouter(prefix="/api/v1/photos", tags=["사진"])

PAGE_QUERY = Query(0, ge=0, description="페이지 번호 (0부터)")
SIZE_QUERY = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="페이지당 개수")
SORT_QUERY = Query("newest", alias="sortBy", description="newest, oldest, mostLiked, mostFavorited")

@router.post("", response_model=PhotoSummary, status_code=status.HTTP_201_CREATED)
def upload_photo(
    file: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    is_public: Optional[bool] = Form(None),
    principal: Principal = Depends(get_current_principal),
    gallery: GalleryService = Depends(get_gallery_service),
    ledger: InteractionLedger = Depends(get_interaction_ledger)
):
    """사진 업로드 (기본 비공개)"""
    photo = unwrap(gallery.upload(file, principal.id, title, description, is_public))
    return to_summary(photo, principal.id, gallery, ledger)

@router.get("/mine", response_model=PhotoListResponse)
def get_my_photos(
    page: int = PAGE_QUERY,
    size: int = SIZE_QUERY,
    sort_by: str = SORT_QUERY,
    principal: Principal = Depends(get_current_principal),
    gallery: GalleryService = Depends(get_gallery_service),
    ledger: InteractionLedger = Depends(get_interaction_ledger)
):
    """내 사진 목록 (공개 + 비공개)"""
    result = unwrap(gallery.list_my_photos(principal.id, sort_by, page, size))
    return PhotoListResponse.from_page(result, to_summaries(result.items, principal.id, gallery, ledger))

@router.get("/public", response_model=PhotoListResponse)
def get_public_photos(
    page: int = PAGE_QUERY,
    size: int = SIZE_QUERY,
    sort_by: str = SORT_QUERY,
    principal: Optional[Principal] = Depends(get_optional_principal),
    gallery: GalleryService = Depends(get_gallery_service),
    ledger: InteractionLedger = Depends(get_interaction_ledger)
):
    """공개 사진 목록 (인증 불필요, 로그인하면 내 좋아요 여부 포함)"""
    requester_id = principal.id if principal else None
    result = unwrap(gallery.list_public_photos(sort_by, page, size))
    return PhotoListResponse.from_page(result, to_summaries(result.items, requester_id, gallery, ledger))

@router.get("/user/{user_id}/public", response_model=PhotoListResponse)
def get_user_public_photos(
    user_id: str,
    page: int = PAGE_QUERY,
    size: int = SIZE_QUERY,
    sort_by: str = SORT_QUERY,
    principal: Optional[Principal] = Depends(get_optional_principal),
    gallery: GalleryService = Depends(get_gallery_service),
    ledger: InteractionLedger = Depends(get_interaction_ledger)
):
    """특정 유저의 공개 사진 목록"""
    requester_id = principal.id if principal else None
    result = unwrap(gallery.list_user_public_photos(user_id, sort_by, page, size))
    return PhotoListResponse.from_page(result, to_summaries(result.items, requester_id, gallery, ledger))

@router.get("/{photo_id}", response_model=PhotoSummary)
def get_photo(
    photo_id: str,
    principal: Optional[Principal] = Depends(get_optional_principal),
    gallery: GalleryService = Depends(get_gallery_service),
    ledger: InteractionLedger = Depends(get_interaction_ledger)
):
    """사진 상세 (비공개는 소유자만)"""
    requester_id = principal.id if principal else None
    photo = unwrap(gallery.get(photo_id, requester_id))
    return to_summary(photo, requester_id, gallery, ledger)

@router.put("/{photo_id}", response_model=PhotoSummary)
def update_photo(
    photo_id: str,
    data: PhotoUpdate,
    principal: Principal = Depends(get_current_principal),
    gallery: GalleryService = Depends(get_gallery_service),
    ledger: InteractionLedger = Depends(get_interaction_ledger)
):
    """사진 정보 수정 (보낸 필드만)"""
    photo = unwrap(gallery.update(photo_id, principal.id, data))
    return to_summary(photo, principal.id, gallery, ledger)

@router.delete("/{photo_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_photo(
    photo_id: str,
    principal: Principal = Depends(get_current_principal),
    gallery: GalleryService = Depends(get_gallery_service)
):
    """사진 삭제"""
    unwrap(gallery.delete(photo_id, principal.id))
    return None

@router.put("/{photo_id}/toggle-privacy", response_model=PhotoSummary)
def toggle_privacy(
    photo_id: str,
    principal: Principal = Depends(get_current_principal),
    gallery: GalleryService = Depends(get_gallery_service),
    ledger: InteractionLedger = Depends(get_interaction_ledger)
):
    """공개 ↔ 비공개 전환"""
    photo = unwrap(gallery.toggle_privacy(photo_id, principal.id))
    return to_summary(photo, principal.id, gallery, ledger)
