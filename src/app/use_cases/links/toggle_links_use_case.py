import logging
from uuid import UUID

from libs.result import Result, Return
from src.app.services.access_cache import AccessCache
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access_helpers import (
    DOCUMENT_NOT_FOUND,
    NOT_OWNER,
    load_document_access,
)
from src.domain.access import resolve_role
from src.domain.entities import DocumentRole, Identity

from .dtos import ToggleLinksResponse

logger = logging.getLogger(__name__)


class ToggleLinksUseCase:
    """
    Enable or disable every link of a document.

    Tokens and expiry are untouched, so re-enabling restores the same URLs.
    """

    def __init__(self, uow: UnitOfWork, cache: AccessCache):
        self.uow = uow
        self.cache = cache

    async def execute(
        self, document_id: UUID, owner: Identity, enabled: bool
    ) -> Result[ToggleLinksResponse]:
        async with self.uow:
            loaded = await load_document_access(self.uow, document_id)
            if loaded is None:
                return Return.err(DOCUMENT_NOT_FOUND)
            _, access = loaded

            if resolve_role(access, owner.email) != DocumentRole.owner:
                return Return.err(NOT_OWNER)

            updated = await self.uow.links.set_enabled_for_document(document_id, enabled)
            await self.uow.commit()

        logger.info(
            f"{'Enabled' if enabled else 'Disabled'} {updated} links of document {document_id}"
        )
        await self.cache.delete_file_info(document_id)
        return Return.ok(ToggleLinksResponse(enabled=enabled, updated=updated))
