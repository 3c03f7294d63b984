# app/config.py
from pydantic_settings import BaseSettings
from pydantic import field_validator

class Settings(BaseSettings):
    """환경변수 설정"""

    # API 기본 설정
    app_name: str = "Photo Gallery API"
    debug: bool = False

    # Database
    database_url: str = "sqlite:///./gallery.db"

    # JWT
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30

    # 파일 저장
    upload_dir: str = "uploads"
    max_file_size: int = 10 * 1024 * 1024  # 10MB

    # 페이지네이션
    default_page_size: int = 12
    max_page_size: int = 100

    # 로그
    log_dir: str = "logs"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    @field_validator('secret_key')
    def validate_secret_key(cls, v):
        if len(v) < 32:
            raise ValueError('SECRET_KEY는 최소 32자 이상이어야 합니다')
        return v

    @field_validator('max_page_size', 'default_page_size')
    def validate_page_size(cls, v):
        if v < 1:
            raise ValueError('페이지 크기는 1 이상이어야 합니다')
        return v

    class Config:
        env_file = ".env"
        case_sensitive = False

# 싱글톤 인스턴스
settings = Settings()
