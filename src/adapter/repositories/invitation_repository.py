from typing import Optional
from uuid import UUID

from sqlalchemy import delete, func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.invitation_repository import IInvitationRepository
from src.domain.entities import Invitation, InvitationStatus


class InvitationRepository(IInvitationRepository):
    """Invitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_token(self, token: str) -> Optional[Invitation]:
        """Get invitation by token"""
        stmt = select(Invitation).where(Invitation.token == token)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_pending_by_document_and_email(
        self, document_id: UUID, email: str
    ) -> Optional[Invitation]:
        """Get pending invitation by document and email"""
        stmt = select(Invitation).where(
            Invitation.document_id == document_id,
            Invitation.email == email,
            Invitation.status == InvitationStatus.pending,
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def count_pending_by_email(self, email: str) -> int:
        """Count pending invitations addressed to an email"""
        stmt = select(func.count(Invitation.id)).where(
            Invitation.email == email,
            Invitation.status == InvitationStatus.pending,
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def update(self, invitation: Invitation) -> Invitation:
        """Update existing invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def delete_by_document(self, document_id: UUID) -> None:
        """Delete every invitation of a document"""
        await self.session.execute(
            delete(Invitation).where(Invitation.document_id == document_id)
        )
