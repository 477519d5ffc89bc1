from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access_helpers import (
    DOCUMENT_NOT_FOUND,
    NOT_OWNER,
    load_document_access,
)
from src.domain.access import resolve_role
from src.domain.entities import DocumentRole, Identity

from .dtos import LinkResponse, ListLinksResponse


class ListLinksUseCase:
    """All shareable links of a document, owner only"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, document_id: UUID, owner: Identity) -> Result[ListLinksResponse]:
        async with self.uow:
            loaded = await load_document_access(self.uow, document_id)
            if loaded is None:
                return Return.err(DOCUMENT_NOT_FOUND)
            _, access = loaded

            if resolve_role(access, owner.email) != DocumentRole.owner:
                return Return.err(NOT_OWNER)

            links = await self.uow.links.list_by_document(document_id)
            return Return.ok(
                ListLinksResponse(links=[LinkResponse.from_link(link) for link in links])
            )
