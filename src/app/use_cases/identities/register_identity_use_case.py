"""
Register Identity Use Case

Makes an identity provider assertion known to the sharing service.
"""

import logging

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access_helpers import EMAIL_TAKEN, ensure_user, iso
from src.domain.entities import Identity

from .dtos import RegisterIdentityResponse

logger = logging.getLogger(__name__)


class RegisterIdentityUseCase:
    """
    Use case for registering the caller as a known identity.

    Business Rules:
    - Idempotent upsert keyed by the token's user id
    - The display name follows the latest token
    - An email already registered under another id is rejected
    - Reports how many pending invitations await the email
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Identity) -> Result[RegisterIdentityResponse]:
        async with self.uow:
            user = await ensure_user(self.uow, caller)
            if user is None:
                return Return.err(EMAIL_TAKEN)
            await self.uow.commit()

            pending = await self.uow.invitations.count_pending_by_email(user.email)
            logger.info(f"Identity registered: {user.email} ({pending} pending invitations)")

            return Return.ok(
                RegisterIdentityResponse(
                    id=str(user.id),
                    email=user.email,
                    name=user.name,
                    created_at=iso(user.created_at),
                    pending_invitations=pending,
                )
            )
