from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.api.utils.ids import parse_uuid
from src.app.services.access_cache import AccessCache
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.annotations import (
    AnnotationSnapshotResponse,
    ReadAnnotationsUseCase,
    WriteAnnotationsResponse,
    WriteAnnotationsUseCase,
)
from src.depends import get_access_cache, get_current_identity, get_unit_of_work
from src.domain.entities import Identity

router = APIRouter(prefix="/documents", tags=["Annotations"])


class WriteAnnotationsRequest(BaseModel):
    """
    Write annotations HTTP request payload

    payload is stored as-is; version is the version the client last read.
    """

    payload: str = Field(..., description="Opaque annotation payload (XFDF)")
    version: int = Field(..., description="Expected current version")


@router.get(
    "/{document_id}/annotations",
    status_code=status.HTTP_200_OK,
    response_model=AnnotationSnapshotResponse,
)
async def read_annotations(
    document_id: str,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: AccessCache = Depends(get_access_cache),
):
    """
    Read Annotations

    Raises:
        - 403 Forbidden: INSUFFICIENT_ROLE (owner or editor only)
        - 404 Not Found: DOCUMENT_NOT_FOUND
    """
    document_uuid = parse_uuid(document_id, "INVALID_DOCUMENT_ID", "document ID")

    use_case = ReadAnnotationsUseCase(uow, cache)
    result = await use_case.execute(document_uuid, caller)

    if result.is_err():
        error = result.error
        if error.code == "INSUFFICIENT_ROLE":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "DOCUMENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.put(
    "/{document_id}/annotations",
    status_code=status.HTTP_200_OK,
    response_model=WriteAnnotationsResponse,
)
async def write_annotations(
    document_id: str,
    request: WriteAnnotationsRequest,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: AccessCache = Depends(get_access_cache),
):
    """
    Write Annotations

    Compare-and-swap on the version: a stale version is rejected with the
    current one in error.details.current_version.

    Raises:
        - 400 Bad Request: INVALID_VERSION
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: DOCUMENT_NOT_FOUND
        - 409 Conflict: VERSION_CONFLICT
    """
    document_uuid = parse_uuid(document_id, "INVALID_DOCUMENT_ID", "document ID")

    use_case = WriteAnnotationsUseCase(uow, cache)
    result = await use_case.execute(
        document_uuid, caller, request.payload, request.version
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_VERSION":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "INSUFFICIENT_ROLE":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "DOCUMENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "VERSION_CONFLICT":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value
