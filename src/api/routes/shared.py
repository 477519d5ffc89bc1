from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.error import ClientError, ServerError
from src.api.routes.documents import attachment_response
from src.app.services.storage import IStorage
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.links import (
    DownloadSharedDocumentUseCase,
    GetSharedDocumentUseCase,
    SharedDocumentResponse,
)
from src.depends import get_link_grant, get_storage, get_unit_of_work

router = APIRouter(prefix="/shared", tags=["Shared"])


def grant_ids(grant: dict):
    try:
        return UUID(grant["link_id"]), UUID(grant["document_id"])
    except (KeyError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired link grant",
        )


@router.get(
    "/document",
    status_code=status.HTTP_200_OK,
    response_model=SharedDocumentResponse,
)
async def get_shared_document(
    grant: dict = Depends(get_link_grant),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Shared Document

    Metadata of the document a link grant points to. The link is checked
    again, so a disabled or deleted link stops working at once.

    Raises:
        - 401 Unauthorized: Missing, invalid or expired link grant
        - 404 Not Found: LINK_NOT_FOUND
    """
    link_id, document_id = grant_ids(grant)

    use_case = GetSharedDocumentUseCase(uow)
    result = await use_case.execute(link_id, document_id)

    if result.is_err():
        error = result.error
        if error.code == "LINK_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.get("/download", status_code=status.HTTP_200_OK)
async def download_shared_document(
    grant: dict = Depends(get_link_grant),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: IStorage = Depends(get_storage),
):
    link_id, document_id = grant_ids(grant)

    use_case = DownloadSharedDocumentUseCase(uow, storage)
    result = await use_case.execute(link_id, document_id)

    if result.is_err():
        error = result.error
        if error.code == "LINK_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return attachment_response(result.value.name, result.value.content)
