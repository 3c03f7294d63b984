# app/repositories/base.py
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Set

from fastapi import UploadFile

from app.core.result import ServiceError
from app.core.sort_by import SortBy
from app.models.photo import Photo
from app.models.user import User

class PhotoStore(ABC):
    """
    사진 저장소 계약

    서비스는 이 인터페이스만 알고, 실제 쿼리는 구현체가 담당한다.
    """

    @abstractmethod
    def get(self, photo_id: str) -> Optional[Photo]:
        """id로 조회 (없으면 None)"""

    @abstractmethod
    def exists(self, photo_id: str) -> bool:
        """존재 여부"""

    @abstractmethod
    def add(self, photo: Photo) -> Photo:
        """새 사진 저장 (id 발급)"""

    @abstractmethod
    def save(self, photo: Photo) -> Photo:
        """변경 내용 저장"""

    @abstractmethod
    def delete(self, photo: Photo) -> None:
        """사진 삭제 (좋아요/즐겨찾기 포함)"""

    @abstractmethod
    def next_upload_order(self, owner_id: str) -> int:
        """소유자의 다음 업로드 순번"""

    @abstractmethod
    def find_owners(self, owner_ids: Iterable[str]) -> Dict[str, User]:
        """소유자 id → User"""

    @abstractmethod
    def list_by_owner(self, owner_id: str, sort_by: SortBy, offset: int, limit: int) -> List[Photo]:
        """소유자의 전체 사진 (공개 + 비공개)"""

    @abstractmethod
    def count_by_owner(self, owner_id: str) -> int:
        pass

    @abstractmethod
    def list_public(self, sort_by: SortBy, offset: int, limit: int) -> List[Photo]:
        """전체 공개 사진"""

    @abstractmethod
    def count_public(self) -> int:
        pass

    @abstractmethod
    def list_public_by_owner(self, owner_id: str, sort_by: SortBy, offset: int, limit: int) -> List[Photo]:
        """특정 유저의 공개 사진"""

    @abstractmethod
    def count_public_by_owner(self, owner_id: str) -> int:
        pass

class InteractionStore(ABC):
    """좋아요 / 즐겨찾기 저장소 계약 (photo_id, user_id 쌍이 유일)"""

    @abstractmethod
    def exists(self, photo_id: str, user_id: str) -> bool:
        pass

    @abstractmethod
    def add(self, photo_id: str, user_id: str) -> bool:
        """
        새 레코드 저장

        Returns:
            bool: 저장 성공 여부 (이미 있거나 그 사이 사진이 지워졌으면 False)
        """

    @abstractmethod
    def remove(self, photo_id: str, user_id: str) -> bool:
        """삭제 (지운 게 있으면 True)"""

    @abstractmethod
    def count_for_photo(self, photo_id: str) -> int:
        pass

    @abstractmethod
    def counts_for_photos(self, photo_ids: Iterable[str]) -> Dict[str, int]:
        """여러 사진의 개수를 한 번에 (없는 사진은 키 없음)"""

    @abstractmethod
    def existing_for(self, user_id: str, photo_ids: Iterable[str]) -> Set[str]:
        """photo_ids 중 이 유저가 누른 사진 id"""

    @abstractmethod
    def list_photos_of(self, user_id: str, sort_by: SortBy, offset: int, limit: int) -> List[Photo]:
        """유저가 누른 사진 목록 (아직 볼 수 있는 사진만)"""

    @abstractmethod
    def count_photos_of(self, user_id: str) -> int:
        pass

class FileStore(ABC):
    """원본 파일 저장소 계약"""

    @abstractmethod
    def validate(self, upload: Optional[UploadFile]) -> Optional[ServiceError]:
        """업로드 파일 검증 (문제 없으면 None)"""

    @abstractmethod
    def save(self, upload: UploadFile, owner_id: str, photo_id: str) -> str:
        """파일 저장 후 저장 경로 반환"""

    @abstractmethod
    def delete(self, file_path: str) -> None:
        """파일 삭제 (없으면 무시)"""
