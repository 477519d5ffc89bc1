from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.api.utils.ids import parse_uuid
from src.app.services.access_cache import AccessCache
from src.app.services.storage import IStorage
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.documents import (
    CountDocumentsResponse,
    CountDocumentsUseCase,
    DeleteDocumentResponse,
    DeleteDocumentUseCase,
    DocumentInfoResponse,
    DocumentUsersResponse,
    DownloadDocumentUseCase,
    GetDocumentInfoUseCase,
    GetUserRoleUseCase,
    ListDocumentsResponse,
    ListDocumentsUseCase,
    ListDocumentUsersUseCase,
    UploadDocumentResponse,
    UploadDocumentUseCase,
    UserRoleResponse,
)
from src.depends import (
    get_access_cache,
    get_current_identity,
    get_storage,
    get_unit_of_work,
)
from src.domain.entities import Identity

router = APIRouter(prefix="/documents", tags=["Documents"])


def attachment_response(name: str, content: bytes) -> Response:
    return Response(
        content=content,
        media_type="application/octet-stream",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(name)}"},
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UploadDocumentResponse,
)
async def upload_document(
    file: UploadFile = File(...),
    name: Optional[str] = Form(None),
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: IStorage = Depends(get_storage),
    cache: AccessCache = Depends(get_access_cache),
):
    """
    Upload Document

    Stores the file and makes the caller its owner.

    Raises:
        - 400 Bad Request: EMPTY_FILE
        - 401 Unauthorized: Invalid or expired JWT
        - 409 Conflict: EMAIL_TAKEN
        - 413 Request Entity Too Large: FILE_TOO_LARGE
        - 500 Internal Server Error: Server error
    """
    content = await file.read()

    use_case = UploadDocumentUseCase(
        uow, storage, cache, ApplicationConfig.MAX_UPLOAD_BYTES
    )
    result = await use_case.execute(caller, name or file.filename, content)

    if result.is_err():
        error = result.error
        if error.code == "EMPTY_FILE":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "FILE_TOO_LARGE":
            raise ClientError(error, status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE)
        elif error.code == "EMAIL_TAKEN":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=ListDocumentsResponse,
)
async def list_documents(
    page: int = Query(0),
    sort: str = Query("DESC"),
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: AccessCache = Depends(get_access_cache),
):
    """
    List Documents

    Documents the caller owns, views or edits, sorted by last update.

    Raises:
        - 400 Bad Request: INVALID_PAGE, INVALID_SORT
        - 401 Unauthorized: Invalid or expired JWT
    """
    use_case = ListDocumentsUseCase(uow, cache, ApplicationConfig.FILES_PER_PAGE)
    result = await use_case.execute(caller, page, sort)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_PAGE", "INVALID_SORT"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


@router.get(
    "/total",
    status_code=status.HTTP_200_OK,
    response_model=CountDocumentsResponse,
)
async def count_documents(
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = CountDocumentsUseCase(uow)
    result = await use_case.execute(caller)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get(
    "/{document_id}",
    status_code=status.HTTP_200_OK,
    response_model=DocumentInfoResponse,
)
async def get_document_info(
    document_id: str,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: AccessCache = Depends(get_access_cache),
):
    """
    Document Info

    Owner, viewers, editors, links and timestamps; any role may read.

    Raises:
        - 400 Bad Request: Invalid document_id format
        - 403 Forbidden: NO_ACCESS
        - 404 Not Found: DOCUMENT_NOT_FOUND
    """
    document_uuid = parse_uuid(document_id, "INVALID_DOCUMENT_ID", "document ID")

    use_case = GetDocumentInfoUseCase(uow, cache)
    result = await use_case.execute(document_uuid, caller)

    if result.is_err():
        error = result.error
        if error.code == "DOCUMENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "NO_ACCESS":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


@router.get("/{document_id}/download", status_code=status.HTTP_200_OK)
async def download_document(
    document_id: str,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: IStorage = Depends(get_storage),
):
    """
    Download Document

    Raises:
        - 400 Bad Request: Invalid document_id format
        - 403 Forbidden: NO_ACCESS
        - 404 Not Found: DOCUMENT_NOT_FOUND
        - 500 Internal Server Error: STORAGE_ERROR
    """
    document_uuid = parse_uuid(document_id, "INVALID_DOCUMENT_ID", "document ID")

    use_case = DownloadDocumentUseCase(uow, storage)
    result = await use_case.execute(document_uuid, caller)

    if result.is_err():
        error = result.error
        if error.code == "DOCUMENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "NO_ACCESS":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return attachment_response(result.value.name, result.value.content)


@router.delete(
    "/{document_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeleteDocumentResponse,
)
async def delete_document(
    document_id: str,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: IStorage = Depends(get_storage),
    cache: AccessCache = Depends(get_access_cache),
):
    """
    Delete Document

    Owner only. Removes members, invitations, links, annotations and the
    stored bytes.

    Raises:
        - 400 Bad Request: Invalid document_id format
        - 403 Forbidden: NOT_OWNER
        - 404 Not Found: DOCUMENT_NOT_FOUND
    """
    document_uuid = parse_uuid(document_id, "INVALID_DOCUMENT_ID", "document ID")

    use_case = DeleteDocumentUseCase(uow, storage, cache)
    result = await use_case.execute(document_uuid, caller)

    if result.is_err():
        error = result.error
        if error.code == "DOCUMENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "NOT_OWNER":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


@router.get(
    "/{document_id}/role",
    status_code=status.HTTP_200_OK,
    response_model=UserRoleResponse,
)
async def get_user_role(
    document_id: str,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: AccessCache = Depends(get_access_cache),
):
    """
    My Role

    Raises:
        - 403 Forbidden: NO_ACCESS (resolved role is none)
        - 404 Not Found: DOCUMENT_NOT_FOUND
    """
    document_uuid = parse_uuid(document_id, "INVALID_DOCUMENT_ID", "document ID")

    use_case = GetUserRoleUseCase(uow, cache)
    result = await use_case.execute(document_uuid, caller)

    if result.is_err():
        error = result.error
        if error.code == "DOCUMENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "NO_ACCESS":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


@router.get(
    "/{document_id}/users",
    status_code=status.HTTP_200_OK,
    response_model=DocumentUsersResponse,
)
async def list_document_users(
    document_id: str,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: AccessCache = Depends(get_access_cache),
):
    """
    Document Users

    Owner only: owner, viewers and editors with display names.

    Raises:
        - 403 Forbidden: NOT_OWNER
        - 404 Not Found: DOCUMENT_NOT_FOUND
    """
    document_uuid = parse_uuid(document_id, "INVALID_DOCUMENT_ID", "document ID")

    use_case = ListDocumentUsersUseCase(uow, cache)
    result = await use_case.execute(document_uuid, caller)

    if result.is_err():
        error = result.error
        if error.code == "DOCUMENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "NOT_OWNER":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value
