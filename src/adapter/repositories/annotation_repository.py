from typing import Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.annotation_repository import IAnnotationRepository
from src.domain.base import utc_now
from src.domain.entities import AnnotationSnapshot


class AnnotationRepository(IAnnotationRepository):
    """AnnotationSnapshot repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_document(self, document_id: UUID) -> Optional[AnnotationSnapshot]:
        """Get the annotation snapshot of a document"""
        stmt = (
            select(AnnotationSnapshot)
            .where(AnnotationSnapshot.document_id == document_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_or_create(self, document_id: UUID) -> AnnotationSnapshot:
        """Get the snapshot, creating the empty version-0 default if missing"""
        snapshot = await self.get_by_document(document_id)
        if snapshot is not None:
            return snapshot

        snapshot = AnnotationSnapshot(document_id=document_id)
        self.session.add(snapshot)
        try:
            await self.session.flush()
        except IntegrityError:
            # Another request created it first
            await self.session.rollback()
            return await self.get_by_document(document_id)
        await self.session.refresh(snapshot)
        return snapshot

    async def compare_and_swap(
        self, document_id: UUID, expected_version: int, payload: str
    ) -> bool:
        """Single conditional UPDATE keyed on the expected version"""
        stmt = (
            update(AnnotationSnapshot)
            .where(
                AnnotationSnapshot.document_id == document_id,
                AnnotationSnapshot.version == expected_version,
            )
            .values(
                payload=payload,
                version=AnnotationSnapshot.version + 1,
                updated_at=utc_now(),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def delete_by_document(self, document_id: UUID) -> None:
        """Delete the snapshot of a document"""
        await self.session.execute(
            delete(AnnotationSnapshot).where(AnnotationSnapshot.document_id == document_id)
        )
