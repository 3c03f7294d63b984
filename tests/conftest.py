# tests/conftest.py
import io
import os
import shutil
import tempfile

# 앱 import 전에 환경변수 세팅 (settings는 import 시점에 읽힘)
_TMP_DIR = tempfile.mkdtemp(prefix="gallery-test-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["SECRET_KEY"] = "test-secret-key-0123456789abcdefghijklmnop"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP_DIR, "uploads")
os.environ["LOG_DIR"] = os.path.join(_TMP_DIR, "logs")
os.environ["DEBUG"] = "false"

import pytest
from fastapi import UploadFile
from fastapi.testclient import TestClient
from starlette.datastructures import Headers

from app.config import settings
from app.database import Base, SessionLocal, engine, init_db
from app.core.security import create_access_token, hash_password
from app.models.photo import Photo
from app.models.user import User
from app.repositories.interaction_repository import favorite_store, like_store
from app.repositories.photo_repository import SqlPhotoStore
from app.services.authorization_service import AuthorizationGuard
from app.services.file_storage_service import LocalFileStore
from app.services.gallery_service import GalleryService
from app.services.interaction_service import InteractionLedger

@pytest.fixture(autouse=True)
def reset_state():
    """테스트마다 테이블/업로드 폴더 초기화"""
    init_db()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    shutil.rmtree(settings.upload_dir, ignore_errors=True)
    os.makedirs(settings.upload_dir, exist_ok=True)
    yield

@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(username=None, email=None, password="password123"):
        counter["n"] += 1
        n = counter["n"]
        user = User(
            email=email or f"user{n}@example.com",
            username=username or f"user{n}",
            hashed_password=hash_password(password),
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make

@pytest.fixture
def make_photo(db):
    """파일 없이 DB에만 사진 생성"""
    store = SqlPhotoStore(db)

    def _make(owner, is_public=True, title=None):
        photo = Photo(
            user_id=owner.id,
            title=title,
            file_path="",
            is_public=is_public,
            upload_order=store.next_upload_order(owner.id),
        )
        return store.add(photo)

    return _make

@pytest.fixture
def make_upload():
    def _make(filename="photo.jpg", content=b"fake image bytes", content_type="image/jpeg"):
        return UploadFile(
            file=io.BytesIO(content),
            filename=filename,
            headers=Headers({"content-type": content_type}),
        )

    return _make

@pytest.fixture
def guard():
    return AuthorizationGuard()

@pytest.fixture
def file_store():
    return LocalFileStore()

@pytest.fixture
def gallery(db, file_store, guard):
    return GalleryService(SqlPhotoStore(db), file_store, guard)

@pytest.fixture
def ledger(db, guard):
    return InteractionLedger(SqlPhotoStore(db), like_store(db), favorite_store(db), guard)

@pytest.fixture
def auth_headers():
    def _headers(user):
        token = create_access_token(data={"sub": user.email, "user_id": user.id, "name": user.username})
        return {"Authorization": f"Bearer {token}"}

    return _headers

@pytest.fixture
def client():
    from main import app

    with TestClient(app) as test_client:
        yield test_client
