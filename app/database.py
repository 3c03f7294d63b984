# app/database.py
from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from app.config import settings

_is_sqlite = settings.database_url.startswith("sqlite")

# 데이터베이스 엔진 생성
engine = create_engine(
    settings.database_url,
    echo=settings.debug,  # SQL 쿼리 로그 출력
    connect_args={"check_same_thread": False} if _is_sqlite else {}
)

if _is_sqlite:
    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        """SQLite는 FK(ON DELETE CASCADE)를 연결마다 켜줘야 함"""
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

# 세션 팩토리
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base 클래스 (모든 모델의 부모)
Base = declarative_base()

def init_db() -> None:
    """테이블 생성 (없는 것만)"""
    # 메타데이터 등록을 위해 모델 import
    import app.models.user  # noqa: F401
    import app.models.photo  # noqa: F401
    import app.models.interaction  # noqa: F401
    Base.metadata.create_all(bind=engine)

# DB 세션 의존성 (FastAPI에서 사용)
def get_db():
    """DB 세션 생성 및 종료 (커밋 안 된 변경은 close 시 롤백)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
