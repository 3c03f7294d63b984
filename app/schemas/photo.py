# app/schemas/photo.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from app.core.pagination import PageResult

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 2000

class PhotoUpdate(BaseModel):
    """사진 수정 요청 (None인 필드는 그대로 둠)"""
    title: Optional[str] = Field(None, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    is_public: Optional[bool] = None

    def changes(self) -> dict:
        """실제로 바꿀 필드만"""
        return self.model_dump(exclude_none=True)

class PhotoSummary(BaseModel):
    """사진 응답 (목록/상세/수정 결과)"""
    id: str
    owner_id: str
    owner_name: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    file_path: str
    url: str
    is_public: bool
    upload_order: int
    created_at: datetime
    updated_at: datetime
    like_count: int = 0
    favorite_count: int = 0
    # 요청자 기준 (비로그인이면 False)
    is_liked_by_user: bool = False
    is_favorited_by_user: bool = False

class PhotoListResponse(BaseModel):
    """페이지네이션 목록 응답"""
    items: list[PhotoSummary]
    current_page: int
    total_pages: int
    total_items: int
    page_size: int
    has_next: bool
    has_previous: bool

    @classmethod
    def from_page(cls, page: PageResult, items: list[PhotoSummary]) -> "PhotoListResponse":
        return cls(
            items=items,
            current_page=page.current_page,
            total_pages=page.total_pages,
            total_items=page.total_items,
            page_size=page.page_size,
            has_next=page.has_next,
            has_previous=page.has_previous,
        )

class LikeStatusResponse(BaseModel):
    """좋아요 상태"""
    photo_id: str
    like_count: int
    is_liked: bool
