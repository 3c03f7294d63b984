# app/api/routes/auth.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from datetime import timedelta

from app.database import get_db
from app.models.user import User
from app.schemas.user import UserCreate, UserLogin, UserResponse, Token
from app.core.logger import logger
from app.core.security import hash_password, verify_password, create_access_token
from app.config import settings

router = APIRouter(prefix="/api/v1/auth", tags=["인증"])

@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def signup(user_data: UserCreate, db: Session = Depends(get_db)):
    """회원가입"""
    duplicate_email = HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="이미 사용 중인 이메일입니다"
    )
    
    # 이메일 중복 체크
    existing_user = db.query(User).filter(User.email == user_data.email).first()
    if existing_user:
        raise duplicate_email
    
    # 새 유저 생성
    new_user = User(
        email=user_data.email,
        username=user_data.username,
        hashed_password=hash_password(user_data.password)
    )
    
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        # 동시 가입 (unique 제약)
        db.rollback()
        raise duplicate_email
    db.refresh(new_user)
    
    logger.info(f"✅ 회원가입: {new_user.id}")
    return new_user

@router.post("/login", response_model=Token)
def login(user_data: UserLogin, db: Session = Depends(get_db)):
    """로그인"""
    invalid_credentials = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="이메일 또는 비밀번호가 올바르지 않습니다",
        headers={"WWW-Authenticate": "Bearer"}
    )
    
    # 유저 조회 + 비밀번호 검증
    user = db.query(User).filter(User.email == user_data.email).first()
    if not user or not user.is_active or not verify_password(user_data.password, user.hashed_password):
        raise invalid_credentials
    
    # JWT 토큰 생성
    access_token_expires = timedelta(minutes=settings.access_token_expire_minutes)
    access_token = create_access_token(
        data={"sub": user.email, "user_id": user.id, "name": user.username},
        expires_delta=access_token_expires
    )
    
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "expires_in": settings.access_token_expire_minutes * 60
    }
