"""
Resolve Link Token Use Case

Exchanges a shareable link token for a temporary read-only grant.
"""

import logging

from libs.result import Result, Return
from src.api.utils.jwt import create_link_grant_token
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access_helpers import iso
from src.domain.base import utc_now

from .delete_link_use_case import LINK_NOT_FOUND
from .dtos import LinkGrantResponse

logger = logging.getLogger(__name__)


class ResolveLinkTokenUseCase:
    """
    Use case for accessing a document through a shareable link.

    Business Rules:
    - The link must exist, be enabled and unexpired, and its document must
      exist
    - Every failure returns the same LINK_NOT_FOUND error, so a caller cannot
      tell a disabled link from an unknown one
    - No membership is written; the grant is a short-lived signed token
      scoped to the document and role
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[LinkGrantResponse]:
        async with self.uow:
            link = await self.uow.links.get_by_token(token)
            if link is None or not link.is_usable(utc_now()):
                return Return.err(LINK_NOT_FOUND)

            document = await self.uow.documents.get_by_id(link.document_id)
            if document is None:
                return Return.err(LINK_NOT_FOUND)

            access_token, expires_at = create_link_grant_token(
                link.id, document.id, link.role.value
            )
            logger.info(f"Link {link.id} resolved for document {document.id}")

            return Return.ok(
                LinkGrantResponse(
                    document_id=str(document.id),
                    document_name=document.name,
                    role=link.role.value,
                    access_token=access_token,
                    expires_at=iso(expires_at),
                )
            )
