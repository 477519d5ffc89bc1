"""
Invite Users Use Case

Grants a role on a document to a list of emails. Known identities get
access immediately; unknown emails get an invitation to redeem later.
"""

import logging
import secrets
from functools import partial
from typing import List, Tuple
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.access_cache import AccessCache
from src.app.services.notifier import INotifier, deliver_safely
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access_helpers import (
    DOCUMENT_NOT_FOUND,
    load_document_access,
)
from src.domain.access import resolve_role
from src.domain.base import utc_now
from src.domain.emails import parse_email
from src.domain.entities import DocumentRole, GrantRole, Identity, Invitation

from .dtos import InviteOutcome, InviteUsersResponse

logger = logging.getLogger(__name__)


class InviteUsersUseCase:
    """
    Use case for inviting users to a document.

    Business Rules:
    - Only the owner can invite
    - Role must be viewer or editor; every email must be valid, otherwise
      nothing is applied
    - Emails already holding any role are skipped
    - Known identities are added to the requested set and notified
    - Unknown emails get one pending invitation per (document, email)
    - Each email is committed on its own: a failure partway through keeps
      the emails already processed
    - Caches are invalidated before notifications are dispatched, also for
      the emails already committed when a later one fails
    """

    def __init__(self, uow: UnitOfWork, cache: AccessCache, notifier: INotifier):
        self.uow = uow
        self.cache = cache
        self.notifier = notifier

    async def execute(
        self, document_id: UUID, owner: Identity, emails: List[str], role: str
    ) -> Result[InviteUsersResponse]:
        """
        Execute invite users use case.

        Args:
            document_id: Target document
            owner: Authenticated caller, must own the document
            emails: Emails to invite
            role: viewer or editor

        Returns:
            Result with a per-email outcome list, or Error
        """
        try:
            grant_role = GrantRole(role)
        except ValueError:
            return Return.err(
                Error("INVALID_ROLE", f"Invalid role: {role}. Must be one of: viewer, editor")
            )

        if not emails:
            return Return.err(Error("INVALID_EMAIL", "At least one email is required"))

        normalized = []
        for raw in emails:
            email = parse_email(raw)
            if email is None:
                return Return.err(Error("INVALID_EMAIL", f"Invalid email: {raw}"))
            if email not in normalized:
                normalized.append(email)

        outcomes: List[InviteOutcome] = []
        notifications: List[Tuple[partial, str]] = []
        implicated_emails: List[str] = []
        implicated_user_ids: List[UUID] = []

        try:
            async with self.uow:
                loaded = await load_document_access(self.uow, document_id)
                if loaded is None:
                    return Return.err(DOCUMENT_NOT_FOUND)
                document, access = loaded

                if resolve_role(access, owner.email) != DocumentRole.owner:
                    return Return.err(
                        Error("NOT_OWNER", "Only the owner can invite users")
                    )

                implicated_user_ids.append(document.owner_id)
                document_name = document.name

                for email in normalized:
                    if resolve_role(access, email) != DocumentRole.none:
                        outcomes.append(InviteOutcome(email=email, status="skipped"))
                        continue

                    user = await self.uow.users.get_by_email(email)
                    if user is not None:
                        await self.uow.documents.add_member(document_id, email, grant_role)
                        await self.uow.commit()
                        access = access.with_member(email, grant_role)

                        outcomes.append(InviteOutcome(email=email, status="granted"))
                        implicated_emails.append(email)
                        implicated_user_ids.append(user.id)
                        notifications.append(
                            (
                                partial(
                                    self.notifier.send_access_granted,
                                    email,
                                    document_name,
                                    grant_role.value,
                                ),
                                f"access granted to {email}",
                            )
                        )
                        continue

                    pending = await self.uow.invitations.get_pending_by_document_and_email(
                        document_id, email
                    )
                    if pending is not None:
                        outcomes.append(InviteOutcome(email=email, status="already_invited"))
                        continue

                    token = secrets.token_urlsafe(32)
                    await self.uow.invitations.create(
                        Invitation(
                            document_id=document_id,
                            email=email,
                            role=grant_role,
                            token=token,
                        )
                    )
                    await self.uow.commit()

                    outcomes.append(InviteOutcome(email=email, status="invited"))
                    implicated_emails.append(email)
                    notifications.append(
                        (
                            partial(
                                self.notifier.send_invitation,
                                email,
                                token,
                                document_name,
                            ),
                            f"invitation to {email}",
                        )
                    )

                if implicated_emails:
                    document.updated_at = utc_now()
                    await self.uow.documents.update(document)
                    await self.uow.commit()
        finally:
            # Whatever was committed stays committed, so its caches and
            # notifications are settled even when a later email fails
            if implicated_emails:
                await self.cache.invalidate_access(
                    document_id, emails=implicated_emails, user_ids=implicated_user_ids
                )
            for send, description in notifications:
                await deliver_safely(send(), description)

        logger.info(
            f"Invite on document {document_id}: "
            + ", ".join(f"{o.email}={o.status}" for o in outcomes)
        )

        return Return.ok(
            InviteUsersResponse(message="Invitations processed", results=outcomes)
        )
