# app/repositories/interaction_repository.py
from typing import Dict, Iterable, List, Set

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.logger import logger
from app.core.sort_by import SortBy
from app.models.interaction import PhotoFavorite, PhotoLike
from app.models.photo import Photo
from app.repositories.base import InteractionStore
from app.repositories.photo_repository import order_photos

class SqlInteractionStore(InteractionStore):
    """
    좋아요 / 즐겨찾기 공용 저장소

    model에 PhotoLike 또는 PhotoFavorite를 넘긴다.
    """

    def __init__(self, db: Session, model):
        self.db = db
        self.model = model

    def exists(self, photo_id: str, user_id: str) -> bool:
        return self.db.query(self.model.id).filter(
            self.model.photo_id == photo_id,
            self.model.user_id == user_id
        ).first() is not None

    def add(self, photo_id: str, user_id: str) -> bool:
        self.db.add(self.model(photo_id=photo_id, user_id=user_id))
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            # 동시 요청이 먼저 넣었거나 (유니크 제약), 그 사이 사진이 지워짐 (FK)
            if self.exists(photo_id, user_id) or not self._photo_exists(photo_id):
                logger.warning(
                    f"{self.model.__tablename__} 삽입 안 됨: photo={photo_id}, user={user_id}"
                )
                return False
            raise
        return True

    def _photo_exists(self, photo_id: str) -> bool:
        return self.db.query(Photo.id).filter(Photo.id == photo_id).first() is not None

    def remove(self, photo_id: str, user_id: str) -> bool:
        deleted = self.db.query(self.model).filter(
            self.model.photo_id == photo_id,
            self.model.user_id == user_id
        ).delete(synchronize_session=False)
        self.db.commit()
        return deleted > 0

    def count_for_photo(self, photo_id: str) -> int:
        return self.db.query(self.model).filter(self.model.photo_id == photo_id).count()

    def counts_for_photos(self, photo_ids: Iterable[str]) -> Dict[str, int]:
        ids = set(photo_ids)
        if not ids:
            return {}
        rows = self.db.query(self.model.photo_id, func.count(self.model.id))\
            .filter(self.model.photo_id.in_(ids))\
            .group_by(self.model.photo_id)\
            .all()
        return {photo_id: total for photo_id, total in rows}

    def existing_for(self, user_id: str, photo_ids: Iterable[str]) -> Set[str]:
        ids = set(photo_ids)
        if not ids:
            return set()
        rows = self.db.query(self.model.photo_id).filter(
            self.model.user_id == user_id,
            self.model.photo_id.in_(ids)
        ).all()
        return {photo_id for (photo_id,) in rows}

    def _photos_of(self, user_id: str):
        # 나중에 비공개로 바뀐 남의 사진은 목록에서 빠짐
        return self.db.query(Photo)\
            .join(self.model, self.model.photo_id == Photo.id)\
            .filter(
                self.model.user_id == user_id,
                or_(Photo.is_public.is_(True), Photo.user_id == user_id)
            )

    def list_photos_of(self, user_id: str, sort_by: SortBy, offset: int, limit: int) -> List[Photo]:
        query = order_photos(self._photos_of(user_id), sort_by, self.model.created_at)
        return query.offset(offset).limit(limit).all()

    def count_photos_of(self, user_id: str) -> int:
        return self._photos_of(user_id).count()

def like_store(db: Session) -> SqlInteractionStore:
    return SqlInteractionStore(db, PhotoLike)

def favorite_store(db: Session) -> SqlInteractionStore:
    return SqlInteractionStore(db, PhotoFavorite)
