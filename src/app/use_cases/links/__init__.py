"""
Shareable Link Use Cases

Link issuance, toggling, deletion and token based access.
"""

from .create_or_get_link_use_case import CreateOrGetLinkUseCase
from .delete_link_use_case import LINK_NOT_FOUND, DeleteLinkUseCase
from .dtos import (
    DeleteLinkResponse,
    LinkGrantResponse,
    LinkResponse,
    ListLinksResponse,
    SharedDocumentResponse,
    ToggleLinksResponse,
)
from .list_links_use_case import ListLinksUseCase
from .resolve_link_token_use_case import ResolveLinkTokenUseCase
from .shared_document_use_cases import (
    DownloadSharedDocumentUseCase,
    GetSharedDocumentUseCase,
)
from .toggle_links_use_case import ToggleLinksUseCase

__all__ = [
    "CreateOrGetLinkUseCase",
    "ListLinksUseCase",
    "ToggleLinksUseCase",
    "DeleteLinkUseCase",
    "ResolveLinkTokenUseCase",
    "GetSharedDocumentUseCase",
    "DownloadSharedDocumentUseCase",
    "LINK_NOT_FOUND",
    "LinkResponse",
    "ListLinksResponse",
    "ToggleLinksResponse",
    "DeleteLinkResponse",
    "LinkGrantResponse",
    "SharedDocumentResponse",
]
