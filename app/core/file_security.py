# app/core/file_security.py
import os
from typing import Optional

from fastapi import UploadFile

from app.config import settings

# 설정
ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}
ALLOWED_MIME_TYPES = {
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp"
}

def get_extension(filename: str) -> str:
    """확장자 추출 (소문자, 점 포함)"""
    return os.path.splitext(filename)[1].lower()

def get_file_size(file: UploadFile) -> int:
    """파일 크기 (bytes)"""
    file.file.seek(0, 2)  # 파일 끝으로 이동
    size = file.file.tell()  # 현재 위치 = 파일 크기
    file.file.seek(0)  # 다시 처음으로
    return size

def check_file_extension(filename: Optional[str]) -> Optional[str]:
    """파일 확장자 검증 (문제 있으면 메시지 반환)"""
    if not filename:
        return "파일 이름이 올바르지 않습니다"
    ext = get_extension(filename)
    if not ext:
        return "파일 확장자가 없습니다"
    if ext not in ALLOWED_EXTENSIONS:
        return f"허용되지 않은 파일 형식입니다. 허용: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
    return None

def check_file_size(file: UploadFile) -> Optional[str]:
    """파일 크기 검증"""
    size = get_file_size(file)
    if size == 0:
        return "빈 파일은 업로드할 수 없습니다"
    if size > settings.max_file_size:
        return f"파일 크기가 너무 큽니다. 최대: {settings.max_file_size // 1024 // 1024}MB"
    return None

def check_mime_type(file: UploadFile) -> Optional[str]:
    """MIME 타입 검증 (content_type 기준)"""
    if file.content_type not in ALLOWED_MIME_TYPES:
        return f"이미지 파일만 업로드할 수 있습니다. 업로드한 타입: {file.content_type}"
    return None

def check_uploaded_file(file: Optional[UploadFile]) -> Optional[str]:
    """전체 파일 검증 (첫 번째 문제 메시지, 없으면 None)"""
    if file is None:
        return "파일이 없습니다"
    return (
        check_file_extension(file.filename)
        or check_file_size(file)
        or check_mime_type(file)
    )
