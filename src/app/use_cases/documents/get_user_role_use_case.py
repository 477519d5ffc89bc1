"""
Get User Role Use Case

Answers "what is my role on this document".
"""

from uuid import UUID

from libs.result import Result, Return
from src.app.services.access_cache import AccessCache
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access_helpers import (
    DOCUMENT_NOT_FOUND,
    NO_ACCESS,
    load_document_access,
)
from src.domain.access import resolve_role
from src.domain.emails import normalize_email
from src.domain.entities import DocumentRole, Identity

from .dtos import UserRoleResponse


class GetUserRoleUseCase:
    """
    Use case for resolving the caller's role.

    Business Rules:
    - Served from the (document, email) role entry when present
    - A resolved role of none is Forbidden and never cached
    """

    def __init__(self, uow: UnitOfWork, cache: AccessCache):
        self.uow = uow
        self.cache = cache

    async def execute(self, document_id: UUID, caller: Identity) -> Result[UserRoleResponse]:
        email = normalize_email(caller.email)

        cached_role = await self.cache.get_user_role(document_id, email)
        if cached_role is not None:
            return Return.ok(UserRoleResponse(document_id=str(document_id), role=cached_role))

        async with self.uow:
            loaded = await load_document_access(self.uow, document_id)
            if loaded is None:
                return Return.err(DOCUMENT_NOT_FOUND)
            _, access = loaded

        role = resolve_role(access, email)
        if role == DocumentRole.none:
            return Return.err(NO_ACCESS)

        await self.cache.set_user_role(document_id, email, role.value)
        return Return.ok(UserRoleResponse(document_id=str(document_id), role=role.value))
