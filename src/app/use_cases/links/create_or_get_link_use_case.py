"""
Create Or Get Link Use Case

Returns the shareable link of a document for one role, minting it if absent.
"""

import logging
import secrets
from datetime import timedelta
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.repositories.shareable_link_repository import DuplicateLinkError
from src.app.services.access_cache import AccessCache
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access_helpers import (
    DOCUMENT_NOT_FOUND,
    NOT_OWNER,
    load_document_access,
)
from src.domain.access import resolve_role
from src.domain.base import utc_now
from src.domain.entities import DocumentRole, GrantRole, Identity, ShareableLink

from .dtos import LinkResponse

logger = logging.getLogger(__name__)


class CreateOrGetLinkUseCase:
    """
    Use case for creating (or fetching) a shareable link.

    Business Rules:
    - Only the owner can create links
    - At most one link per (document, role); an existing usable link is
      returned unchanged, whether enabled or disabled
    - An expired link is replaced by a fresh one
    - A concurrent duplicate surfaces as LINK_ALREADY_EXISTS
    """

    def __init__(self, uow: UnitOfWork, cache: AccessCache):
        self.uow = uow
        self.cache = cache

    async def execute(
        self,
        document_id: UUID,
        owner: Identity,
        role: str,
        expires_in_seconds: Optional[int] = None,
    ) -> Result[LinkResponse]:
        try:
            grant_role = GrantRole(role)
        except ValueError:
            return Return.err(
                Error("INVALID_ROLE", f"Invalid role: {role}. Must be one of: viewer, editor")
            )

        if expires_in_seconds is not None and expires_in_seconds <= 0:
            return Return.err(Error("INVALID_EXPIRY", "Expiry must be a positive number of seconds"))

        async with self.uow:
            loaded = await load_document_access(self.uow, document_id)
            if loaded is None:
                return Return.err(DOCUMENT_NOT_FOUND)
            _, access = loaded

            if resolve_role(access, owner.email) != DocumentRole.owner:
                return Return.err(NOT_OWNER)

            now = utc_now()
            existing = await self.uow.links.get_by_document_and_role(document_id, grant_role)
            if existing is not None:
                if not existing.is_expired(now):
                    return Return.ok(LinkResponse.from_link(existing))
                await self.uow.links.delete(existing.id)

            expires_at = (
                now + timedelta(seconds=expires_in_seconds)
                if expires_in_seconds is not None
                else None
            )
            try:
                link = await self.uow.links.create(
                    ShareableLink(
                        document_id=document_id,
                        role=grant_role,
                        token=secrets.token_urlsafe(32),
                        enabled=True,
                        expires_at=expires_at,
                    )
                )
            except DuplicateLinkError:
                return Return.err(
                    Error(
                        "LINK_ALREADY_EXISTS",
                        f"A {grant_role.value} link for this document already exists",
                    )
                )
            await self.uow.commit()

            logger.info(f"Created {grant_role.value} link {link.id} for document {document_id}")
            response = LinkResponse.from_link(link, created=True)

        await self.cache.delete_file_info(document_id)
        return Return.ok(response)
