"""
Get Document Info Use Case

Document metadata: owner, viewer and editor sets, link summary, timestamps.
"""

from uuid import UUID

from libs.result import Result, Return
from src.app.services.access_cache import AccessCache
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access_helpers import (
    DOCUMENT_NOT_FOUND,
    NO_ACCESS,
    UNREGISTERED_USER_NAME,
    iso,
    load_document_access,
)
from src.domain.access import DocumentAccess, resolve_role
from src.domain.entities import DocumentRole, Identity

from .dtos import DocumentInfoResponse, DocumentOwner, LinkSummary


class GetDocumentInfoUseCase:
    """
    Use case for reading document metadata.

    Business Rules:
    - Any role other than none may read it
    - The cached entry is document scoped; the caller's role is resolved
      against the cached sets on every read
    """

    def __init__(self, uow: UnitOfWork, cache: AccessCache):
        self.uow = uow
        self.cache = cache

    async def execute(
        self, document_id: UUID, caller: Identity
    ) -> Result[DocumentInfoResponse]:
        cached = await self.cache.get_file_info(document_id)
        if cached is not None:
            info = DocumentInfoResponse.model_validate(cached)
        else:
            async with self.uow:
                loaded = await load_document_access(self.uow, document_id)
                if loaded is None:
                    return Return.err(DOCUMENT_NOT_FOUND)
                document, access = loaded

                owner = await self.uow.users.get_by_id(document.owner_id)
                links = await self.uow.links.list_by_document(document_id)

                info = DocumentInfoResponse(
                    id=str(document.id),
                    name=document.name,
                    size_bytes=document.size_bytes,
                    owner=DocumentOwner(
                        id=str(document.owner_id),
                        email=document.owner_email,
                        name=owner.name if owner else UNREGISTERED_USER_NAME,
                    ),
                    viewers=sorted(access.viewers),
                    editors=sorted(access.editors),
                    links=[
                        LinkSummary(role=link.role.value, enabled=link.enabled)
                        for link in links
                    ],
                    created_at=iso(document.created_at),
                    updated_at=iso(document.updated_at),
                )
            await self.cache.set_file_info(document_id, info.model_dump(mode="json"))

        access = DocumentAccess(
            document_id=UUID(info.id),
            owner_id=UUID(info.owner.id),
            owner_email=info.owner.email,
            viewers=frozenset(info.viewers),
            editors=frozenset(info.editors),
        )
        role = resolve_role(access, caller.email)
        if role == DocumentRole.none:
            return Return.err(NO_ACCESS)

        return Return.ok(info.model_copy(update={"role": role.value}))
