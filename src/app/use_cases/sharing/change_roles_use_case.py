"""
Change Roles Use Case

Batch role mutation: one independent change per entry.
"""

from typing import List
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.access_cache import AccessCache
from src.app.services.notifier import INotifier
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access_helpers import DOCUMENT_NOT_FOUND
from src.domain.entities import Identity

from .change_role_use_case import ChangeRoleUseCase
from .dtos import ChangeRolesResponse, RoleChange, RoleChangeResult


class ChangeRolesUseCase:
    """
    Use case for applying several role changes.

    Business Rules:
    - A missing document or a non-owner caller is reported once for the
      whole batch
    - Every entry is authorized and validated on its own
    - Best effort: earlier entries stay applied when a later one fails, and
      the response tells which entries applied
    """

    def __init__(self, uow: UnitOfWork, cache: AccessCache, notifier: INotifier):
        self.uow = uow
        self.change_role = ChangeRoleUseCase(uow, cache, notifier)

    async def execute(
        self, document_id: UUID, owner: Identity, changes: List[RoleChange]
    ) -> Result[ChangeRolesResponse]:
        async with self.uow:
            document = await self.uow.documents.get_by_id(document_id)
            if document is None:
                return Return.err(DOCUMENT_NOT_FOUND)

            if document.owner_id != owner.id:
                return Return.err(Error("NOT_OWNER", "Only the owner can change roles"))

        results = []
        for change in changes:
            result = await self.change_role.execute(
                document_id, owner, change.email, change.role
            )
            if result.is_ok():
                results.append(
                    RoleChangeResult(
                        email=result.value.email, status="updated", role=result.value.role
                    )
                )
            else:
                results.append(
                    RoleChangeResult(
                        email=change.email,
                        status="error",
                        code=result.error.code,
                        message=result.error.message,
                    )
                )

        applied = sum(1 for r in results if r.status == "updated")
        message = (
            "Roles changed successfully"
            if applied == len(results)
            else f"{applied} of {len(results)} role changes applied"
        )
        return Return.ok(ChangeRolesResponse(message=message, results=results))
