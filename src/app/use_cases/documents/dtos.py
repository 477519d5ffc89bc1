"""
Document Use Case DTOs (Data Transfer Objects)

All Response classes for the document domain.
"""

from typing import List, Optional

from pydantic import BaseModel


# ============================================================================
# Response DTOs
# ============================================================================


class UploadDocumentResponse(BaseModel):
    """Response for upload document use case"""

    id: str
    name: str
    size_bytes: int
    created_at: str


class DocumentListItem(BaseModel):
    """One document in a listing page, with the caller's resolved role"""

    id: str
    name: str
    owner: str
    owner_email: str
    role: str
    updated_at: str


class ListDocumentsResponse(BaseModel):
    """Response for list documents use case"""

    items: List[DocumentListItem]
    page: int
    per_page: int
    sort: str


class CountDocumentsResponse(BaseModel):
    """Response for count documents use case"""

    total: int


class DocumentOwner(BaseModel):
    id: str
    email: str
    name: str


class LinkSummary(BaseModel):
    role: str
    enabled: bool


class DocumentInfoResponse(BaseModel):
    """Response for document info use case"""

    id: str
    name: str
    size_bytes: int
    owner: DocumentOwner
    viewers: List[str]
    editors: List[str]
    links: List[LinkSummary]
    created_at: str
    updated_at: str
    role: Optional[str] = None


class DocumentUser(BaseModel):
    email: str
    name: str
    role: str


class DocumentUsersResponse(BaseModel):
    """Response for list document users use case"""

    users: List[DocumentUser]


class UserRoleResponse(BaseModel):
    """Response for get user role use case"""

    document_id: str
    role: str


class DownloadedDocument(BaseModel):
    """Bytes of a document, as returned by the download use case"""

    name: str
    content: bytes


class DeleteDocumentResponse(BaseModel):
    """Response for delete document use case"""

    message: str
