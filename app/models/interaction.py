# app/models/interaction.py
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from app.database import Base
from app.models.photo import utcnow
import uuid

class PhotoLike(Base):
    """좋아요 모델 (공개 사진, 본인 사진 제외)"""
    __tablename__ = "photo_likes"
    
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    photo_id = Column(String, ForeignKey("gallery_photos.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    
    # 1 유저 1 좋아요 (동시 요청 경합은 DB가 막음)
    __table_args__ = (UniqueConstraint("photo_id", "user_id", name="uq_photo_likes_photo_user"),)
    
    def __repr__(self):
        return f"<PhotoLike photo={self.photo_id} user={self.user_id}>"

class PhotoFavorite(Base):
    """즐겨찾기 모델 (개인 북마크, 본인 비공개 사진도 가능)"""
    __tablename__ = "photo_favorites"
    
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    photo_id = Column(String, ForeignKey("gallery_photos.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    
    __table_args__ = (UniqueConstraint("photo_id", "user_id", name="uq_photo_favorites_photo_user"),)
    
    def __repr__(self):
        return f"<PhotoFavorite photo={self.photo_id} user={self.user_id}>"
