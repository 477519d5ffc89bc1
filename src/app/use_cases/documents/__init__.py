"""
Document Use Cases

Upload, listing, metadata, download and deletion of documents.
"""

from .count_documents_use_case import CountDocumentsUseCase
from .delete_document_use_case import DeleteDocumentUseCase
from .download_document_use_case import DownloadDocumentUseCase
from .dtos import (
    CountDocumentsResponse,
    DeleteDocumentResponse,
    DocumentInfoResponse,
    DocumentListItem,
    DocumentOwner,
    DocumentUser,
    DocumentUsersResponse,
    DownloadedDocument,
    LinkSummary,
    ListDocumentsResponse,
    UploadDocumentResponse,
    UserRoleResponse,
)
from .get_document_info_use_case import GetDocumentInfoUseCase
from .get_user_role_use_case import GetUserRoleUseCase
from .list_document_users_use_case import ListDocumentUsersUseCase
from .list_documents_use_case import ListDocumentsUseCase
from .upload_document_use_case import UploadDocumentUseCase

__all__ = [
    "UploadDocumentUseCase",
    "ListDocumentsUseCase",
    "CountDocumentsUseCase",
    "GetDocumentInfoUseCase",
    "ListDocumentUsersUseCase",
    "GetUserRoleUseCase",
    "DownloadDocumentUseCase",
    "DeleteDocumentUseCase",
    "UploadDocumentResponse",
    "DocumentListItem",
    "ListDocumentsResponse",
    "CountDocumentsResponse",
    "DocumentOwner",
    "LinkSummary",
    "DocumentInfoResponse",
    "DocumentUser",
    "DocumentUsersResponse",
    "UserRoleResponse",
    "DownloadedDocument",
    "DeleteDocumentResponse",
]
