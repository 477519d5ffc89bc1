"""
Delete Document Use Case

Owner-initiated, terminal removal of a document and everything hanging off it.
"""

import logging
from uuid import UUID

from libs.result import Result, Return
from src.app.services.access_cache import AccessCache
from src.app.services.storage import IStorage, StorageError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access_helpers import (
    DOCUMENT_NOT_FOUND,
    NOT_OWNER,
    load_document_access,
)
from src.domain.access import resolve_role
from src.domain.entities import DocumentRole, Identity

from .dtos import DeleteDocumentResponse

logger = logging.getLogger(__name__)


class DeleteDocumentUseCase:
    """
    Use case for deleting a document.

    Business Rules:
    - Only the owner may delete
    - Removes invitations, links, annotation snapshot, members, the document
      row, then the stored bytes
    - Caches are invalidated before the bytes are removed; a storage failure
      is logged and leaves an orphaned file, not a live document
    - Every cache family of the document is invalidated, plus the role
      entries and listing pages of the owner and every known member
    """

    def __init__(self, uow: UnitOfWork, storage: IStorage, cache: AccessCache):
        self.uow = uow
        self.storage = storage
        self.cache = cache

    async def execute(
        self, document_id: UUID, caller: Identity
    ) -> Result[DeleteDocumentResponse]:
        async with self.uow:
            loaded = await load_document_access(self.uow, document_id)
            if loaded is None:
                return Return.err(DOCUMENT_NOT_FOUND)
            document, access = loaded

            if resolve_role(access, caller.email) != DocumentRole.owner:
                return Return.err(NOT_OWNER)

            locator = document.storage_locator
            member_emails = sorted(access.member_emails())
            known = await self.uow.users.get_by_emails(member_emails)
            user_ids = [document.owner_id] + [user.id for user in known.values()]

            await self.uow.invitations.delete_by_document(document_id)
            await self.uow.links.delete_by_document(document_id)
            await self.uow.annotations.delete_by_document(document_id)
            await self.uow.documents.delete_members(document_id)
            await self.uow.documents.delete(document_id)
            await self.uow.commit()

        logger.info(f"Document {document_id} deleted by {access.owner_email}")

        await self.cache.invalidate_document(document_id)
        await self.cache.invalidate_access(
            document_id,
            emails=[access.owner_email] + member_emails,
            user_ids=user_ids,
        )

        try:
            await self.storage.delete(locator)
        except (StorageError, OSError) as e:
            logger.warning(f"Could not remove stored bytes {locator}: {e}")

        return Return.ok(DeleteDocumentResponse(message="Document deleted successfully"))
