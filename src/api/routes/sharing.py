from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.api.utils.ids import parse_uuid
from src.app.services.access_cache import AccessCache
from src.app.services.notifier import INotifier
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.sharing import (
    ChangeRoleResponse,
    ChangeRolesResponse,
    ChangeRolesUseCase,
    ChangeRoleUseCase,
    InviteUsersResponse,
    InviteUsersUseCase,
    RoleChange,
)
from src.depends import (
    get_access_cache,
    get_current_identity,
    get_notifier,
    get_unit_of_work,
)
from src.domain.entities import Identity

router = APIRouter(prefix="/documents", tags=["Sharing"])


class InviteUsersRequest(BaseModel):
    """
    Invite users HTTP request payload

    Emails are validated by the use case so one bad address rejects the
    whole request with INVALID_EMAIL.
    """

    emails: List[str] = Field(..., min_length=1, description="Emails to invite")
    role: str = Field(..., description="viewer or editor")


class ChangeRoleRequest(BaseModel):
    email: str = Field(..., description="Email whose role changes")
    role: Optional[str] = Field(
        None, description="viewer, editor, or none / null to remove access"
    )


class ChangeRolesRequest(BaseModel):
    changes: List[RoleChange] = Field(..., min_length=1)


@router.post(
    "/{document_id}/invite",
    status_code=status.HTTP_200_OK,
    response_model=InviteUsersResponse,
)
async def invite_users(
    document_id: str,
    request: InviteUsersRequest,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: AccessCache = Depends(get_access_cache),
    notifier: INotifier = Depends(get_notifier),
):
    """
    Invite Users

    Known identities are granted access at once; unknown emails receive an
    invitation. Emails that already have access are skipped.

    Raises:
        - 400 Bad Request: INVALID_ROLE, INVALID_EMAIL
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: NOT_OWNER
        - 404 Not Found: DOCUMENT_NOT_FOUND
    """
    document_uuid = parse_uuid(document_id, "INVALID_DOCUMENT_ID", "document ID")

    use_case = InviteUsersUseCase(uow, cache, notifier)
    result = await use_case.execute(document_uuid, caller, request.emails, request.role)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_ROLE", "INVALID_EMAIL"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "NOT_OWNER":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "DOCUMENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/{document_id}/roles",
    status_code=status.HTTP_200_OK,
    response_model=ChangeRoleResponse,
)
async def change_role(
    document_id: str,
    request: ChangeRoleRequest,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: AccessCache = Depends(get_access_cache),
    notifier: INotifier = Depends(get_notifier),
):
    """
    Change Role

    Moves an email between viewers and editors, or removes its access.

    Raises:
        - 400 Bad Request: INVALID_ROLE, INVALID_EMAIL, CANNOT_CHANGE_OWNER
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: NOT_OWNER
        - 404 Not Found: DOCUMENT_NOT_FOUND
    """
    document_uuid = parse_uuid(document_id, "INVALID_DOCUMENT_ID", "document ID")

    use_case = ChangeRoleUseCase(uow, cache, notifier)
    result = await use_case.execute(document_uuid, caller, request.email, request.role)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_ROLE", "INVALID_EMAIL", "CANNOT_CHANGE_OWNER"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "NOT_OWNER":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "DOCUMENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/{document_id}/roles/batch",
    status_code=status.HTTP_200_OK,
    response_model=ChangeRolesResponse,
)
async def change_roles(
    document_id: str,
    request: ChangeRolesRequest,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: AccessCache = Depends(get_access_cache),
    notifier: INotifier = Depends(get_notifier),
):
    """
    Change Roles

    Applies each change independently and reports a result per entry.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: NOT_OWNER
        - 404 Not Found: DOCUMENT_NOT_FOUND
    """
    document_uuid = parse_uuid(document_id, "INVALID_DOCUMENT_ID", "document ID")

    use_case = ChangeRolesUseCase(uow, cache, notifier)
    result = await use_case.execute(document_uuid, caller, request.changes)

    if result.is_err():
        error = result.error
        if error.code == "DOCUMENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "NOT_OWNER":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value
