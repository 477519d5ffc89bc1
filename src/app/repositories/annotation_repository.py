from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import AnnotationSnapshot


class IAnnotationRepository(ABC):
    """AnnotationSnapshot repository interface - application layer"""

    @abstractmethod
    async def get_by_document(self, document_id: UUID) -> Optional[AnnotationSnapshot]:
        """Get the annotation snapshot of a document"""
        pass

    @abstractmethod
    async def get_or_create(self, document_id: UUID) -> AnnotationSnapshot:
        """Get the snapshot, creating the empty version-0 default if missing"""
        pass

    @abstractmethod
    async def compare_and_swap(
        self, document_id: UUID, expected_version: int, payload: str
    ) -> bool:
        """
        Atomically store payload and increment version by one.

        Only applies when the stored version equals expected_version.

        Returns:
            True if the write was applied, False on version mismatch
        """
        pass

    @abstractmethod
    async def delete_by_document(self, document_id: UUID) -> None:
        """Delete the snapshot of a document"""
        pass
