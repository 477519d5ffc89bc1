"""
List Document Users Use Case

Owner-only view of everyone with access to a document.
"""

from uuid import UUID

from libs.result import Result, Return
from src.app.services.access_cache import AccessCache
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access_helpers import (
    DOCUMENT_NOT_FOUND,
    NOT_OWNER,
    UNREGISTERED_USER_NAME,
    load_document_access,
)
from src.domain.access import resolve_role
from src.domain.entities import DocumentRole, Identity

from .dtos import DocumentUser, DocumentUsersResponse


class ListDocumentUsersUseCase:
    """
    Use case for listing the owner, viewers and editors of a document.

    Business Rules:
    - Only the owner may list users
    - Unknown identities are reported as "[Unregistered User]"
    - The list is cached per document; ownership is always checked first
    """

    def __init__(self, uow: UnitOfWork, cache: AccessCache):
        self.uow = uow
        self.cache = cache

    async def execute(
        self, document_id: UUID, caller: Identity
    ) -> Result[DocumentUsersResponse]:
        async with self.uow:
            loaded = await load_document_access(self.uow, document_id)
            if loaded is None:
                return Return.err(DOCUMENT_NOT_FOUND)
            document, access = loaded

            if resolve_role(access, caller.email) != DocumentRole.owner:
                return Return.err(NOT_OWNER)

            cached = await self.cache.get_file_users(document_id)
            if cached is not None:
                return Return.ok(DocumentUsersResponse(users=cached))

            emails = [access.owner_email] + sorted(access.viewers) + sorted(access.editors)
            known = await self.uow.users.get_by_emails(emails)

            users = []
            for email in emails:
                user = known.get(email)
                users.append(
                    DocumentUser(
                        email=email,
                        name=user.name if user else UNREGISTERED_USER_NAME,
                        role=resolve_role(access, email).value,
                    )
                )

        response = DocumentUsersResponse(users=users)
        await self.cache.set_file_users(
            document_id, [user.model_dump(mode="json") for user in users]
        )
        return Return.ok(response)
