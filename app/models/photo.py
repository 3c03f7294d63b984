# app/models/photo.py
from sqlalchemy import Column, String, Text, Boolean, Integer, DateTime, ForeignKey
from app.database import Base
from datetime import datetime, timezone
import uuid

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

class Photo(Base):
    """갤러리 사진 모델 (소유자는 id로만 참조)"""
    __tablename__ = "gallery_photos"
    
    # 기본 필드
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    
    # 메타데이터
    title = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    
    # 저장 경로 (업로드 2단계 전까지는 빈 문자열)
    file_path = Column(String(255), nullable=False, default="")
    
    # 공개 여부 (기본 비공개)
    is_public = Column(Boolean, nullable=False, default=False, index=True)
    
    # 소유자별 업로드 순번 (1부터)
    upload_order = Column(Integer, nullable=False, default=0)
    
    # 타임스탬프 (정렬용이라 마이크로초까지 파이썬에서 기록)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
    
    @property
    def owner_id(self) -> str:
        return self.user_id
    
    def toggle_privacy(self) -> None:
        """공개 ↔ 비공개 전환"""
        self.is_public = not self.is_public
    
    def __repr__(self):
        return f"<Photo {self.id} public={self.is_public}>"
