"""
Change Role Use Case

Moves one email between the viewer and editor sets, or removes it.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.access_cache import AccessCache
from src.app.services.notifier import INotifier, deliver_safely
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access_helpers import DOCUMENT_NOT_FOUND
from src.domain.base import utc_now
from src.domain.emails import parse_email
from src.domain.entities import GrantRole, Identity

from .dtos import ChangeRoleResponse

logger = logging.getLogger(__name__)

NO_ROLE = "none"


class ChangeRoleUseCase:
    """
    Use case for changing (or removing) the role of one email.

    Business Rules:
    - new role must be viewer, editor or none
    - Only the owner (by identity, not email) may change roles
    - The owner's own role cannot be changed
    - The email is removed from both sets before being added to the new one
    - Only known identities are notified
    """

    def __init__(self, uow: UnitOfWork, cache: AccessCache, notifier: INotifier):
        self.uow = uow
        self.cache = cache
        self.notifier = notifier

    async def execute(
        self,
        document_id: UUID,
        owner: Identity,
        target_email: str,
        new_role: Optional[str],
    ) -> Result[ChangeRoleResponse]:
        """
        Execute change role use case.

        Args:
            document_id: Target document
            owner: Authenticated caller, must own the document
            target_email: Email whose role changes
            new_role: viewer, editor, or None / "none" to remove access

        Returns:
            Result with ChangeRoleResponse DTO, or Error
        """
        role_value = new_role or NO_ROLE
        grant_role: Optional[GrantRole] = None
        if role_value != NO_ROLE:
            try:
                grant_role = GrantRole(role_value)
            except ValueError:
                return Return.err(
                    Error(
                        "INVALID_ROLE",
                        f"Invalid role: {role_value}. Must be one of: viewer, editor, none",
                    )
                )

        email = parse_email(target_email)
        if email is None:
            return Return.err(Error("INVALID_EMAIL", f"Invalid email: {target_email}"))

        async with self.uow:
            document = await self.uow.documents.get_by_id(document_id)
            if document is None:
                return Return.err(DOCUMENT_NOT_FOUND)

            if document.owner_id != owner.id:
                return Return.err(Error("NOT_OWNER", "Only the owner can change roles"))

            if email == document.owner_email:
                return Return.err(
                    Error("CANNOT_CHANGE_OWNER", "Cannot change the owner role")
                )

            await self.uow.documents.remove_member(document_id, email)
            if grant_role is not None:
                await self.uow.documents.add_member(document_id, email, grant_role)

            document.updated_at = utc_now()
            await self.uow.documents.update(document)
            await self.uow.commit()

            document_name = document.name
            owner_id = document.owner_id
            target_user = await self.uow.users.get_by_email(email)
            target_user_id = target_user.id if target_user else None

        logger.info(f"Role of {email} on document {document_id} set to {role_value}")

        user_ids = [owner_id] + ([target_user_id] if target_user_id else [])
        await self.cache.invalidate_access(document_id, emails=[email], user_ids=user_ids)

        if target_user_id is not None:
            if grant_role is None:
                notification = self.notifier.send_role_removed(email, document_name)
            else:
                notification = self.notifier.send_role_changed(
                    email, document_name, grant_role.value
                )
            await deliver_safely(notification, f"role change for {email}")

        message = (
            "Role removed successfully" if grant_role is None else "Role changed successfully"
        )
        return Return.ok(ChangeRoleResponse(message=message, email=email, role=role_value))
