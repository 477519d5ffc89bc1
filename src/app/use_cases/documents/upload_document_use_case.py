"""
Upload Document Use Case

Stores the bytes of a new document and registers the caller as its owner.
"""

import logging

from libs.result import Error, Result, Return
from src.app.services.access_cache import AccessCache
from src.app.services.storage import IStorage
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access_helpers import EMAIL_TAKEN, ensure_user, iso
from src.domain.entities import Document, Identity

from .dtos import UploadDocumentResponse

logger = logging.getLogger(__name__)


class UploadDocumentUseCase:
    """
    Use case for uploading a document.

    Business Rules:
    - The uploader becomes the owner; the owner is never a member
    - Empty files and files above the size limit are rejected
    - Stored bytes are removed again if the document row cannot be created
    - The owner's listing pages are invalidated
    """

    def __init__(
        self,
        uow: UnitOfWork,
        storage: IStorage,
        cache: AccessCache,
        max_upload_bytes: int,
    ):
        self.uow = uow
        self.storage = storage
        self.cache = cache
        self.max_upload_bytes = max_upload_bytes

    async def execute(
        self, caller: Identity, name: str, content: bytes
    ) -> Result[UploadDocumentResponse]:
        if not content:
            return Return.err(Error("EMPTY_FILE", "Uploaded file is empty"))
        if len(content) > self.max_upload_bytes:
            return Return.err(
                Error(
                    "FILE_TOO_LARGE",
                    f"File exceeds the maximum size of {self.max_upload_bytes} bytes",
                )
            )

        name = (name or "").strip() or "document"

        async with self.uow:
            owner = await ensure_user(self.uow, caller)
            if owner is None:
                return Return.err(EMAIL_TAKEN)

            locator = await self.storage.store(content, name)
            try:
                document = await self.uow.documents.create(
                    Document(
                        name=name,
                        storage_locator=locator,
                        size_bytes=len(content),
                        owner_id=owner.id,
                        owner_email=owner.email,
                    )
                )
                await self.uow.commit()
            except Exception:
                await self.storage.delete(locator)
                raise

            logger.info(f"Document {document.id} uploaded by {owner.email}")
            await self.cache.invalidate_user(owner.id)

            return Return.ok(
                UploadDocumentResponse(
                    id=str(document.id),
                    name=document.name,
                    size_bytes=document.size_bytes,
                    created_at=iso(document.created_at),
                )
            )
