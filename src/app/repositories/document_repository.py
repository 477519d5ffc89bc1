from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import Document, DocumentMember, GrantRole


class IDocumentRepository(ABC):
    """Document repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, document_id: UUID) -> Optional[Document]:
        """Get document by ID"""
        pass

    @abstractmethod
    async def create(self, document: Document) -> Document:
        """Create a new document"""
        pass

    @abstractmethod
    async def update(self, document: Document) -> Document:
        """Update existing document"""
        pass

    @abstractmethod
    async def delete(self, document_id: UUID) -> None:
        """Delete a document row (dependent rows must be removed first)"""
        pass

    @abstractmethod
    async def get_members(self, document_id: UUID) -> List[DocumentMember]:
        """Get all viewer/editor rows of a document"""
        pass

    @abstractmethod
    async def add_member(
        self, document_id: UUID, email: str, role: GrantRole
    ) -> DocumentMember:
        """Add an email to the viewer or editor set"""
        pass

    @abstractmethod
    async def remove_member(self, document_id: UUID, email: str) -> bool:
        """Remove an email from both sets, returns True if a row was removed"""
        pass

    @abstractmethod
    async def delete_members(self, document_id: UUID) -> None:
        """Remove every member row of a document"""
        pass

    @abstractmethod
    async def list_accessible(
        self, email: str, offset: int, limit: int, descending: bool = True
    ) -> List[Tuple[Document, Optional[GrantRole]]]:
        """
        Get documents an email owns, views or edits, ordered by updated_at.

        Returns:
            (document, member role) pairs; member role is None for owned documents
        """
        pass

    @abstractmethod
    async def count_accessible(self, email: str) -> int:
        """Count documents an email owns, views or edits"""
        pass
