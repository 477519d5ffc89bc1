"""
Shared Document Use Cases

Read-only access to a document through a link grant. The link is checked
again on every request, so disabling or deleting it revokes outstanding
grants immediately.
"""

from typing import Optional, Tuple
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.storage import IStorage, StorageError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access_helpers import iso
from src.app.use_cases.documents.dtos import DownloadedDocument
from src.domain.base import utc_now
from src.domain.entities import Document, ShareableLink

from .delete_link_use_case import LINK_NOT_FOUND
from .dtos import SharedDocumentResponse


async def _load_granted(
    uow: UnitOfWork, link_id: UUID, document_id: UUID
) -> Optional[Tuple[ShareableLink, Document]]:
    link = await uow.links.get_by_id(link_id)
    if link is None or link.document_id != document_id or not link.is_usable(utc_now()):
        return None
    document = await uow.documents.get_by_id(document_id)
    if document is None:
        return None
    return link, document


class GetSharedDocumentUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, link_id: UUID, document_id: UUID) -> Result[SharedDocumentResponse]:
        async with self.uow:
            granted = await _load_granted(self.uow, link_id, document_id)
            if granted is None:
                return Return.err(LINK_NOT_FOUND)
            link, document = granted

            return Return.ok(
                SharedDocumentResponse(
                    id=str(document.id),
                    name=document.name,
                    size_bytes=document.size_bytes,
                    role=link.role.value,
                    updated_at=iso(document.updated_at),
                )
            )


class DownloadSharedDocumentUseCase:
    def __init__(self, uow: UnitOfWork, storage: IStorage):
        self.uow = uow
        self.storage = storage

    async def execute(self, link_id: UUID, document_id: UUID) -> Result[DownloadedDocument]:
        async with self.uow:
            granted = await _load_granted(self.uow, link_id, document_id)
            if granted is None:
                return Return.err(LINK_NOT_FOUND)
            _, document = granted
            name, locator = document.name, document.storage_locator

        try:
            content = await self.storage.retrieve(locator)
        except StorageError as e:
            return Return.err(Error("STORAGE_ERROR", str(e)))

        return Return.ok(DownloadedDocument(name=name, content=content))
