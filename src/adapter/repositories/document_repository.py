from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, delete, func, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.document_repository import IDocumentRepository
from src.domain.entities import Document, DocumentMember, GrantRole


class DocumentRepository(IDocumentRepository):
    """Document repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, document_id: UUID) -> Optional[Document]:
        """Get document by ID"""
        stmt = select(Document).where(Document.id == document_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, document: Document) -> Document:
        """Create a new document"""
        self.session.add(document)
        await self.session.flush()
        await self.session.refresh(document)
        return document

    async def update(self, document: Document) -> Document:
        """Update existing document"""
        self.session.add(document)
        await self.session.flush()
        await self.session.refresh(document)
        return document

    async def delete(self, document_id: UUID) -> None:
        """Delete a document row"""
        await self.session.execute(delete(Document).where(Document.id == document_id))

    async def get_members(self, document_id: UUID) -> List[DocumentMember]:
        """Get all viewer/editor rows of a document"""
        stmt = (
            select(DocumentMember)
            .where(DocumentMember.document_id == document_id)
            .order_by(DocumentMember.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def add_member(
        self, document_id: UUID, email: str, role: GrantRole
    ) -> DocumentMember:
        """Add an email to the viewer or editor set"""
        member = DocumentMember(document_id=document_id, email=email, role=role)
        self.session.add(member)
        await self.session.flush()
        await self.session.refresh(member)
        return member

    async def remove_member(self, document_id: UUID, email: str) -> bool:
        """Remove an email from both sets"""
        # Issued immediately so a following add_member cannot collide in the same flush
        result = await self.session.execute(
            delete(DocumentMember).where(
                DocumentMember.document_id == document_id,
                DocumentMember.email == email,
            )
        )
        return result.rowcount > 0

    async def delete_members(self, document_id: UUID) -> None:
        """Remove every member row of a document"""
        await self.session.execute(
            delete(DocumentMember).where(DocumentMember.document_id == document_id)
        )

    def _accessible_query(self, email: str):
        return (
            select(Document, DocumentMember.role)
            .outerjoin(
                DocumentMember,
                and_(
                    DocumentMember.document_id == Document.id,
                    DocumentMember.email == email,
                ),
            )
            .where(or_(Document.owner_email == email, DocumentMember.id.is_not(None)))
        )

    async def list_accessible(
        self, email: str, offset: int, limit: int, descending: bool = True
    ) -> List[Tuple[Document, Optional[GrantRole]]]:
        """Get documents an email owns, views or edits, ordered by updated_at"""
        order = Document.updated_at.desc() if descending else Document.updated_at.asc()
        stmt = self._accessible_query(email).order_by(order, Document.id).offset(offset).limit(limit)
        result = await self.session.exec(stmt)
        return [(document, role) for document, role in result.all()]

    async def count_accessible(self, email: str) -> int:
        """Count documents an email owns, views or edits"""
        subquery = self._accessible_query(email).subquery()
        stmt = select(func.count()).select_from(subquery)
        result = await self.session.exec(stmt)
        return int(result.one())
