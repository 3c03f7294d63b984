# main.py
import os

from fastapi import FastAPI, Request, status
from fastapi.staticfiles import StaticFiles
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from app.config import settings
from app.database import init_db
from app.api.routes import auth, photos, interactions
from app.api.presenters import UPLOAD_URL_PREFIX
from app.core.logging_middleware import log_requests
from app.core.logger import logger

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug
)

# ===== 로깅 미들웨어 (가장 먼저) =====
@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    return await log_requests(request, call_next)

# 요청 크기 제한 (파일 최대 크기 + 폼 여유분)
MAX_REQUEST_SIZE = settings.max_file_size + 1024 * 1024

@app.middleware("http")
async def limit_upload_size(request: Request, call_next):
    """요청 크기 제한"""
    if request.method in ["POST", "PUT", "PATCH"]:
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > MAX_REQUEST_SIZE:
            return JSONResponse(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                content={"detail": f"요청 크기가 너무 큽니다. 최대: {MAX_REQUEST_SIZE // 1024 // 1024}MB"}
            )
    return await call_next(request)

# ===== 인프라 장애 → 500 (내부 정보 노출 안 함) =====
@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.opt(exception=exc).error(f"DB 오류: {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "서버 오류가 발생했습니다"}
    )

@app.exception_handler(OSError)
async def storage_error_handler(request: Request, exc: OSError):
    logger.opt(exception=exc).error(f"파일 저장소 오류: {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "서버 오류가 발생했습니다"}
    )

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 라우터 등록 (interactions가 /photos/{photo_id}보다 먼저)
app.include_router(auth.router)
app.include_router(interactions.router)
app.include_router(photos.router)

# 정적 파일 서빙
os.makedirs(settings.upload_dir, exist_ok=True)
app.mount(UPLOAD_URL_PREFIX, StaticFiles(directory=settings.upload_dir), name="uploads")

# ===== 시작/종료 =====
@app.on_event("startup")
async def startup_event():
    init_db()
    logger.info("Photo Gallery API 서버 시작")

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Photo Gallery API 서버 종료")

@app.get("/health")
def health_check():
    """헬스체크"""
    return {
        "status": "healthy",
        "service": settings.app_name
    }
