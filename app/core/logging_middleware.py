# app/core/logging_middleware.py
from fastapi import Request
from app.core.logger import logger
import time

async def log_requests(request: Request, call_next):
    """모든 요청/응답 로깅"""
    
    # 요청 시작 시간
    start_time = time.perf_counter()
    
    logger.info(f"➡️  {request.method} {request.url.path}")
    
    try:
        response = await call_next(request)
    except Exception as e:
        process_time = (time.perf_counter() - start_time) * 1000
        
        # 처리 안 된 에러 (인프라 장애 등)
        logger.error(
            f"❌ {request.method} {request.url.path} "
            f"- Error: {type(e).__name__} "
            f"- Time: {process_time:.2f}ms"
        )
        logger.exception("Exception details:")
        raise
    
    process_time = (time.perf_counter() - start_time) * 1000  # ms
    
    logger.info(
        f"⬅️  {request.method} {request.url.path} "
        f"- Status: {response.status_code} "
        f"- Time: {process_time:.2f}ms"
    )
    
    return response
