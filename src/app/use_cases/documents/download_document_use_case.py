from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.storage import IStorage, StorageError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access_helpers import (
    DOCUMENT_NOT_FOUND,
    NO_ACCESS,
    load_document_access,
)
from src.domain.access import resolve_role
from src.domain.entities import DocumentRole, Identity

from .dtos import DownloadedDocument


class DownloadDocumentUseCase:
    """Bytes of a document, for any caller whose role is not none"""

    def __init__(self, uow: UnitOfWork, storage: IStorage):
        self.uow = uow
        self.storage = storage

    async def execute(self, document_id: UUID, caller: Identity) -> Result[DownloadedDocument]:
        async with self.uow:
            loaded = await load_document_access(self.uow, document_id)
            if loaded is None:
                return Return.err(DOCUMENT_NOT_FOUND)
            document, access = loaded

            if resolve_role(access, caller.email) == DocumentRole.none:
                return Return.err(NO_ACCESS)

            name, locator = document.name, document.storage_locator

        try:
            content = await self.storage.retrieve(locator)
        except StorageError as e:
            return Return.err(Error("STORAGE_ERROR", str(e)))

        return Return.ok(DownloadedDocument(name=name, content=content))
