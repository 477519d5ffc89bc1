from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Invitation


class IInvitationRepository(ABC):
    """Invitation repository interface - application layer"""

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[Invitation]:
        """Get invitation by token"""
        pass

    @abstractmethod
    async def get_pending_by_document_and_email(
        self, document_id: UUID, email: str
    ) -> Optional[Invitation]:
        """Get pending invitation by document and email"""
        pass

    @abstractmethod
    async def count_pending_by_email(self, email: str) -> int:
        """Count pending invitations addressed to an email"""
        pass

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def update(self, invitation: Invitation) -> Invitation:
        """Update existing invitation"""
        pass

    @abstractmethod
    async def delete_by_document(self, document_id: UUID) -> None:
        """Delete every invitation of a document"""
        pass
