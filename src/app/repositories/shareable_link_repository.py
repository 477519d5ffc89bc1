from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import GrantRole, ShareableLink


class DuplicateLinkError(Exception):
    """A link for the same (document, role) was created concurrently"""


class IShareableLinkRepository(ABC):
    """ShareableLink repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, link_id: UUID) -> Optional[ShareableLink]:
        """Get link by ID"""
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[ShareableLink]:
        """Get link by token"""
        pass

    @abstractmethod
    async def get_by_document_and_role(
        self, document_id: UUID, role: GrantRole
    ) -> Optional[ShareableLink]:
        """Get the link of a document for one role"""
        pass

    @abstractmethod
    async def list_by_document(self, document_id: UUID) -> List[ShareableLink]:
        """Get all links of a document"""
        pass

    @abstractmethod
    async def create(self, link: ShareableLink) -> ShareableLink:
        """
        Create a new link.

        Raises:
            DuplicateLinkError: a link for the same (document, role) exists
        """
        pass

    @abstractmethod
    async def set_enabled_for_document(self, document_id: UUID, enabled: bool) -> int:
        """Flip the enabled flag of every link of a document, returns rows updated"""
        pass

    @abstractmethod
    async def delete(self, link_id: UUID) -> None:
        """Delete a link"""
        pass

    @abstractmethod
    async def delete_by_document(self, document_id: UUID) -> None:
        """Delete every link of a document"""
        pass
