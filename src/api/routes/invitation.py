from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.app.services.access_cache import AccessCache
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.sharing import (
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
)
from src.depends import get_access_cache, get_current_identity, get_unit_of_work
from src.domain.entities import Identity

router = APIRouter(prefix="/invitations", tags=["Invitations"])


class AcceptInvitationRequest(BaseModel):
    """
    Accept invitation HTTP request payload

    Validates incoming request for accepting an invitation.
    """

    token: str = Field(..., min_length=1, description="Invitation token")


@router.post(
    "/accept",
    status_code=status.HTTP_200_OK,
    response_model=AcceptInvitationResponse,
)
async def accept_invitation(
    request: AcceptInvitationRequest,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: AccessCache = Depends(get_access_cache),
):
    """
    Accept Invitation

    The invited email, once registered with the identity provider, redeems
    the token and joins the invited role.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: EMAIL_MISMATCH
        - 404 Not Found: INVITATION_NOT_FOUND, DOCUMENT_NOT_FOUND
        - 409 Conflict: INVITATION_ALREADY_ACCEPTED, EMAIL_TAKEN
        - 500 Internal Server Error: Server error
    """
    use_case = AcceptInvitationUseCase(uow, cache)
    result = await use_case.execute(request.token, caller)

    if result.is_err():
        error = result.error
        if error.code in ("INVITATION_NOT_FOUND", "DOCUMENT_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "EMAIL_MISMATCH":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code in ("INVITATION_ALREADY_ACCEPTED", "EMAIL_TAKEN"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value
