from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.shareable_link_repository import (
    DuplicateLinkError,
    IShareableLinkRepository,
)
from src.domain.base import utc_now
from src.domain.entities import GrantRole, ShareableLink


class ShareableLinkRepository(IShareableLinkRepository):
    """ShareableLink repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, link_id: UUID) -> Optional[ShareableLink]:
        """Get link by ID"""
        stmt = select(ShareableLink).where(ShareableLink.id == link_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_token(self, token: str) -> Optional[ShareableLink]:
        """Get link by token"""
        stmt = select(ShareableLink).where(ShareableLink.token == token)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_document_and_role(
        self, document_id: UUID, role: GrantRole
    ) -> Optional[ShareableLink]:
        """Get the link of a document for one role"""
        stmt = select(ShareableLink).where(
            ShareableLink.document_id == document_id, ShareableLink.role == role
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_document(self, document_id: UUID) -> List[ShareableLink]:
        """Get all links of a document"""
        stmt = (
            select(ShareableLink)
            .where(ShareableLink.document_id == document_id)
            .order_by(ShareableLink.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, link: ShareableLink) -> ShareableLink:
        """Create a new link"""
        self.session.add(link)
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            raise DuplicateLinkError(str(link.document_id)) from e
        await self.session.refresh(link)
        return link

    async def set_enabled_for_document(self, document_id: UUID, enabled: bool) -> int:
        """Flip the enabled flag of every link of a document"""
        result = await self.session.execute(
            update(ShareableLink)
            .where(ShareableLink.document_id == document_id)
            .values(enabled=enabled, updated_at=utc_now())
        )
        return result.rowcount

    async def delete(self, link_id: UUID) -> None:
        """Delete a link"""
        await self.session.execute(delete(ShareableLink).where(ShareableLink.id == link_id))

    async def delete_by_document(self, document_id: UUID) -> None:
        """Delete every link of a document"""
        await self.session.execute(
            delete(ShareableLink).where(ShareableLink.document_id == document_id)
        )
