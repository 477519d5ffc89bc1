from fastapi import APIRouter, Depends, status

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.identities import (
    RegisterIdentityResponse,
    RegisterIdentityUseCase,
)
from src.depends import get_current_identity, get_unit_of_work
from src.domain.entities import Identity

router = APIRouter(prefix="/identities", tags=["Identities"])


@router.post(
    "/register",
    status_code=status.HTTP_200_OK,
    response_model=RegisterIdentityResponse,
)
async def register_identity(
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Register Identity

    Makes the bearer of an identity provider token known to the service.
    Safe to call on every sign-in.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 409 Conflict: EMAIL_TAKEN
        - 500 Internal Server Error: Server error
    """
    use_case = RegisterIdentityUseCase(uow)
    result = await use_case.execute(caller)

    if result.is_err():
        error = result.error
        if error.code == "EMAIL_TAKEN":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value
