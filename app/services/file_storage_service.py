# app/services/file_storage_service.py
import os
import shutil
import time
from typing import Optional

from fastapi import UploadFile

from app.config import settings
from app.core.file_security import check_uploaded_file, get_extension
from app.core.logger import logger
from app.core.result import ErrorKind, ServiceError
from app.repositories.base import FileStore

class LocalFileStore(FileStore):
    """
    로컬 디스크 파일 저장소

    저장 위치: {upload_dir}/gallery/user-{owner_id}/photo-{photo_id}-{timestamp}.{ext}
    DB에는 upload_dir 기준 상대 경로를 저장한다.
    """

    def __init__(self, upload_dir: Optional[str] = None):
        self.upload_dir = upload_dir or settings.upload_dir

    def validate(self, upload: Optional[UploadFile]) -> Optional[ServiceError]:
        message = check_uploaded_file(upload)
        if message:
            return ServiceError(ErrorKind.VALIDATION, message)
        return None

    def absolute_path(self, file_path: str) -> str:
        root = os.path.abspath(self.upload_dir)
        full_path = os.path.abspath(os.path.join(root, file_path))
        # 업로드 폴더 밖은 건드리지 않음
        if os.path.commonpath([root, full_path]) != root:
            raise ValueError(f"업로드 폴더 밖 경로입니다: {file_path}")
        return full_path

    def save(self, upload: UploadFile, owner_id: str, photo_id: str) -> str:
        ext = get_extension(upload.filename)
        timestamp = int(time.time() * 1000)
        file_path = f"gallery/user-{owner_id}/photo-{photo_id}-{timestamp}{ext}"

        full_path = self.absolute_path(file_path)
        os.makedirs(os.path.dirname(full_path), exist_ok=True)

        upload.file.seek(0)
        with open(full_path, "wb") as buffer:
            shutil.copyfileobj(upload.file, buffer)

        logger.debug(f"파일 저장: {file_path}")
        return file_path

    def delete(self, file_path: str) -> None:
        if not file_path:
            return
        full_path = self.absolute_path(file_path)
        if os.path.exists(full_path):
            os.remove(full_path)
            logger.debug(f"파일 삭제: {file_path}")
