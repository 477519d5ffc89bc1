from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.api.utils.ids import parse_uuid
from src.app.services.access_cache import AccessCache
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.links import (
    CreateOrGetLinkUseCase,
    DeleteLinkResponse,
    DeleteLinkUseCase,
    LinkGrantResponse,
    LinkResponse,
    ListLinksResponse,
    ListLinksUseCase,
    ResolveLinkTokenUseCase,
    ToggleLinksResponse,
    ToggleLinksUseCase,
)
from src.depends import get_access_cache, get_current_identity, get_unit_of_work
from src.domain.entities import Identity

router = APIRouter(tags=["Links"])


class CreateLinkRequest(BaseModel):
    role: str = Field(..., description="viewer or editor")
    expires_in_seconds: Optional[int] = Field(
        None, description="Lifetime of the link; omitted means it never expires"
    )


class ToggleLinksRequest(BaseModel):
    enabled: bool


class AccessLinkRequest(BaseModel):
    token: str = Field(..., min_length=1, description="Shareable link token")


@router.post(
    "/documents/{document_id}/links",
    status_code=status.HTTP_200_OK,
    response_model=LinkResponse,
)
async def create_or_get_link(
    document_id: str,
    request: CreateLinkRequest,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: AccessCache = Depends(get_access_cache),
):
    """
    Create Or Get Link

    Returns the document's link for the role, creating it when absent.
    `created` tells which happened.

    Raises:
        - 400 Bad Request: INVALID_ROLE, INVALID_EXPIRY
        - 403 Forbidden: NOT_OWNER
        - 404 Not Found: DOCUMENT_NOT_FOUND
        - 409 Conflict: LINK_ALREADY_EXISTS (concurrent creation)
    """
    document_uuid = parse_uuid(document_id, "INVALID_DOCUMENT_ID", "document ID")

    use_case = CreateOrGetLinkUseCase(uow, cache)
    result = await use_case.execute(
        document_uuid, caller, request.role, request.expires_in_seconds
    )

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_ROLE", "INVALID_EXPIRY"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "NOT_OWNER":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "DOCUMENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "LINK_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.get(
    "/documents/{document_id}/links",
    status_code=status.HTTP_200_OK,
    response_model=ListLinksResponse,
)
async def list_links(
    document_id: str,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    document_uuid = parse_uuid(document_id, "INVALID_DOCUMENT_ID", "document ID")

    use_case = ListLinksUseCase(uow)
    result = await use_case.execute(document_uuid, caller)

    if result.is_err():
        error = result.error
        if error.code == "NOT_OWNER":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "DOCUMENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/documents/{document_id}/links/toggle",
    status_code=status.HTTP_200_OK,
    response_model=ToggleLinksResponse,
)
async def toggle_links(
    document_id: str,
    request: ToggleLinksRequest,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: AccessCache = Depends(get_access_cache),
):
    """
    Toggle Links

    Enables or disables every link of the document. Tokens are kept, so
    re-enabling restores the same URLs.

    Raises:
        - 403 Forbidden: NOT_OWNER
        - 404 Not Found: DOCUMENT_NOT_FOUND
    """
    document_uuid = parse_uuid(document_id, "INVALID_DOCUMENT_ID", "document ID")

    use_case = ToggleLinksUseCase(uow, cache)
    result = await use_case.execute(document_uuid, caller, request.enabled)

    if result.is_err():
        error = result.error
        if error.code == "NOT_OWNER":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "DOCUMENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.delete(
    "/links/{link_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeleteLinkResponse,
)
async def delete_link(
    link_id: str,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: AccessCache = Depends(get_access_cache),
):
    """
    Delete Link

    Raises:
        - 400 Bad Request: Invalid link_id format
        - 403 Forbidden: NOT_OWNER
        - 404 Not Found: LINK_NOT_FOUND
    """
    link_uuid = parse_uuid(link_id, "INVALID_LINK_ID", "link ID")

    use_case = DeleteLinkUseCase(uow, cache)
    result = await use_case.execute(link_uuid, caller)

    if result.is_err():
        error = result.error
        if error.code == "NOT_OWNER":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "LINK_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/links/access",
    status_code=status.HTTP_200_OK,
    response_model=LinkGrantResponse,
)
async def access_via_link(
    request: AccessLinkRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Access Via Link

    No authentication: the link token is the credential. Returns a
    short-lived read-only grant for the /shared endpoints.

    Raises:
        - 404 Not Found: LINK_NOT_FOUND (unknown, disabled or expired alike)
    """
    use_case = ResolveLinkTokenUseCase(uow)
    result = await use_case.execute(request.token)

    if result.is_err():
        error = result.error
        if error.code == "LINK_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
