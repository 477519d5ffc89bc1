"""
Accept Invitation Use Case

Redeems an invitation token once the invited email has registered.
"""

import logging

from libs.result import Error, Result, Return
from src.app.services.access_cache import AccessCache
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access_helpers import (
    DOCUMENT_NOT_FOUND,
    EMAIL_TAKEN,
    ensure_user,
    load_document_access,
)
from src.domain.access import resolve_role
from src.domain.base import utc_now
from src.domain.emails import normalize_email
from src.domain.entities import DocumentRole, Identity, InvitationStatus

from .dtos import AcceptInvitationResponse

logger = logging.getLogger(__name__)


class AcceptInvitationUseCase:
    """
    Use case for accepting a document invitation.

    Business Rules:
    - The token must exist and still be pending
    - Only the invited email may accept it
    - The email joins the invited role set unless it already has access
    - The invitation is marked accepted either way
    """

    def __init__(self, uow: UnitOfWork, cache: AccessCache):
        self.uow = uow
        self.cache = cache

    async def execute(self, token: str, caller: Identity) -> Result[AcceptInvitationResponse]:
        email = normalize_email(caller.email)

        async with self.uow:
            invitation = await self.uow.invitations.get_by_token(token)
            if invitation is None:
                return Return.err(Error("INVITATION_NOT_FOUND", "Invitation not found"))

            if invitation.status == InvitationStatus.accepted:
                return Return.err(
                    Error("INVITATION_ALREADY_ACCEPTED", "Invitation has already been accepted")
                )

            if invitation.email != email:
                return Return.err(
                    Error("EMAIL_MISMATCH", "This invitation was sent to a different email")
                )

            loaded = await load_document_access(self.uow, invitation.document_id)
            if loaded is None:
                return Return.err(DOCUMENT_NOT_FOUND)
            document, access = loaded

            user = await ensure_user(self.uow, caller)
            if user is None:
                return Return.err(EMAIL_TAKEN)

            current_role = resolve_role(access, email)
            if current_role == DocumentRole.none:
                await self.uow.documents.add_member(document.id, email, invitation.role)
                document.updated_at = utc_now()
                await self.uow.documents.update(document)
                granted_role = invitation.role.value
            else:
                granted_role = current_role.value

            invitation.status = InvitationStatus.accepted
            invitation.accepted_at = utc_now()
            await self.uow.invitations.update(invitation)
            await self.uow.commit()

            document_id = document.id
            document_name = document.name
            user_ids = [document.owner_id, user.id]

        logger.info(f"Invitation to document {document_id} accepted by {email}")

        await self.cache.invalidate_access(document_id, emails=[email], user_ids=user_ids)

        return Return.ok(
            AcceptInvitationResponse(
                document_id=str(document_id),
                document_name=document_name,
                role=granted_role,
                status=InvitationStatus.accepted.value,
            )
        )
