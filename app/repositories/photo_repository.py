# app/repositories/photo_repository.py
from typing import Dict, Iterable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from app.core.sort_by import SortBy
from app.models.interaction import PhotoFavorite, PhotoLike
from app.models.photo import Photo
from app.models.user import User
from app.repositories.base import PhotoStore

def _count_subquery(model):
    """사진별 좋아요/즐겨찾기 수"""
    return (
        select(model.photo_id, func.count(model.id).label("total"))
        .group_by(model.photo_id)
        .subquery()
    )

def order_photos(query: Query, sort_by: SortBy, recency_column=None) -> Query:
    """
    정렬 적용

    recency_column: 최신/오래된순 기준 컬럼 (기본은 사진 생성 시각).
    동점은 항상 id로 끊어서 목록 순서가 요청마다 같게 유지된다.
    """
    recency = recency_column if recency_column is not None else Photo.created_at

    if sort_by == SortBy.NEWEST:
        return query.order_by(recency.desc(), Photo.id)
    if sort_by == SortBy.OLDEST:
        return query.order_by(recency.asc(), Photo.id)

    model = PhotoLike if sort_by == SortBy.MOST_LIKED else PhotoFavorite
    counts = _count_subquery(model)
    return (
        query.outerjoin(counts, counts.c.photo_id == Photo.id)
        .order_by(func.coalesce(counts.c.total, 0).desc(), recency.desc(), Photo.id)
    )

class SqlPhotoStore(PhotoStore):
    """SQLAlchemy 사진 저장소"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, photo_id: str) -> Optional[Photo]:
        return self.db.query(Photo).filter(Photo.id == photo_id).first()

    def exists(self, photo_id: str) -> bool:
        return self.db.query(Photo.id).filter(Photo.id == photo_id).first() is not None

    def _commit(self) -> None:
        # 실패하면 세션을 되돌려서 정리 작업에 다시 쓸 수 있게
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def add(self, photo: Photo) -> Photo:
        self.db.add(photo)
        self._commit()
        self.db.refresh(photo)
        return photo

    def save(self, photo: Photo) -> Photo:
        self.db.add(photo)
        self._commit()
        self.db.refresh(photo)
        return photo

    def delete(self, photo: Photo) -> None:
        # FK CASCADE가 없는 DB에서도 같은 트랜잭션 안에서 정리
        self.db.query(PhotoLike)\
            .filter(PhotoLike.photo_id == photo.id)\
            .delete(synchronize_session=False)
        self.db.query(PhotoFavorite)\
            .filter(PhotoFavorite.photo_id == photo.id)\
            .delete(synchronize_session=False)
        self.db.delete(photo)
        self._commit()

    def next_upload_order(self, owner_id: str) -> int:
        current = self.db.query(func.max(Photo.upload_order))\
            .filter(Photo.user_id == owner_id)\
            .scalar()
        return (current or 0) + 1

    def find_owners(self, owner_ids: Iterable[str]) -> Dict[str, User]:
        ids = set(owner_ids)
        if not ids:
            return {}
        users = self.db.query(User).filter(User.id.in_(ids)).all()
        return {user.id: user for user in users}

    def list_by_owner(self, owner_id: str, sort_by: SortBy, offset: int, limit: int) -> List[Photo]:
        query = self.db.query(Photo).filter(Photo.user_id == owner_id)
        return order_photos(query, sort_by).offset(offset).limit(limit).all()

    def count_by_owner(self, owner_id: str) -> int:
        return self.db.query(Photo).filter(Photo.user_id == owner_id).count()

    def list_public(self, sort_by: SortBy, offset: int, limit: int) -> List[Photo]:
        query = self.db.query(Photo).filter(Photo.is_public.is_(True))
        return order_photos(query, sort_by).offset(offset).limit(limit).all()

    def count_public(self) -> int:
        return self.db.query(Photo).filter(Photo.is_public.is_(True)).count()

    def list_public_by_owner(self, owner_id: str, sort_by: SortBy, offset: int, limit: int) -> List[Photo]:
        query = self.db.query(Photo).filter(
            Photo.user_id == owner_id,
            Photo.is_public.is_(True)
        )
        return order_photos(query, sort_by).offset(offset).limit(limit).all()

    def count_public_by_owner(self, owner_id: str) -> int:
        return self.db.query(Photo).filter(
            Photo.user_id == owner_id,
            Photo.is_public.is_(True)
        ).count()
