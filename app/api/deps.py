# app/api/deps.py
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.core.security import decode_access_token
from app.repositories.base import FileStore
from app.repositories.interaction_repository import favorite_store, like_store
from app.repositories.photo_repository import SqlPhotoStore
from app.services.authorization_service import AuthorizationGuard
from app.services.file_storage_service import LocalFileStore
from app.services.gallery_service import GalleryService
from app.services.interaction_service import InteractionLedger

# JWT Bearer 토큰 스킴 (토큰 없으면 None, 판단은 PrincipalProvider가)
security = HTTPBearer(auto_error=False)

@dataclass(frozen=True)
class Principal:
    """인증된 요청자 (토큰에서 꺼낸 정보)"""
    id: str
    email: str
    name: str

class PrincipalProvider:
    """
    요청자 확인 의존성

    required=True: 토큰 없거나 잘못되면 401
    required=False: 토큰 없으면 None (비로그인), 잘못된 토큰은 401
    """

    def __init__(self, required: bool = True):
        self.required = required

    def __call__(
        self,
        token: Optional[HTTPAuthorizationCredentials] = Depends(security),
        db: Session = Depends(get_db)
    ) -> Optional[Principal]:
        if token is None:
            if self.required:
                raise _credentials_exception()
            return None
        
        # 토큰 디코드
        payload = decode_access_token(token.credentials)
        if payload is None:
            raise _credentials_exception()
        
        email = payload.get("sub")
        if email is None:
            raise _credentials_exception()
        
        # DB에서 유저 조회
        user = db.query(User).filter(User.email == email).first()
        if user is None or not user.is_active:
            raise _credentials_exception()
        
        return Principal(id=user.id, email=user.email, name=user.username)

def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="인증 정보가 올바르지 않습니다",
        headers={"WWW-Authenticate": "Bearer"},
    )

get_current_principal = PrincipalProvider(required=True)
get_optional_principal = PrincipalProvider(required=False)

# ===== 서비스 조립 (요청마다 세션 주입) =====

def get_guard() -> AuthorizationGuard:
    return AuthorizationGuard()

def get_file_store() -> FileStore:
    return LocalFileStore()

def get_gallery_service(
    db: Session = Depends(get_db),
    files: FileStore = Depends(get_file_store),
    guard: AuthorizationGuard = Depends(get_guard)
) -> GalleryService:
    return GalleryService(SqlPhotoStore(db), files, guard)

def get_interaction_ledger(
    db: Session = Depends(get_db),
    guard: AuthorizationGuard = Depends(get_guard)
) -> InteractionLedger:
    return InteractionLedger(SqlPhotoStore(db), like_store(db), favorite_store(db), guard)
