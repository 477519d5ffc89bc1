import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.access_cache import AccessCache
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access_helpers import NOT_OWNER, load_document_access
from src.domain.access import resolve_role
from src.domain.entities import DocumentRole, Identity

from .dtos import DeleteLinkResponse

logger = logging.getLogger(__name__)

LINK_NOT_FOUND = Error("LINK_NOT_FOUND", "Shareable link not found")


class DeleteLinkUseCase:
    """Terminal removal of one link, by the owner of its document"""

    def __init__(self, uow: UnitOfWork, cache: AccessCache):
        self.uow = uow
        self.cache = cache

    async def execute(self, link_id: UUID, owner: Identity) -> Result[DeleteLinkResponse]:
        async with self.uow:
            link = await self.uow.links.get_by_id(link_id)
            if link is None:
                return Return.err(LINK_NOT_FOUND)
            document_id = link.document_id

            loaded = await load_document_access(self.uow, document_id)
            if loaded is None:
                return Return.err(LINK_NOT_FOUND)
            _, access = loaded

            if resolve_role(access, owner.email) != DocumentRole.owner:
                return Return.err(NOT_OWNER)

            await self.uow.links.delete(link_id)
            await self.uow.commit()

        logger.info(f"Deleted link {link_id} of document {document_id}")
        await self.cache.delete_file_info(document_id)
        return Return.ok(DeleteLinkResponse(message="Link deleted successfully"))
