"""
Shareable Link Use Case DTOs (Data Transfer Objects)
"""

from typing import List, Optional

from pydantic import BaseModel

from src.app.use_cases.access_helpers import iso
from src.domain.entities import ShareableLink


class LinkResponse(BaseModel):
    """A shareable link as shown to the document owner"""

    id: str
    document_id: str
    role: str
    token: str
    enabled: bool
    expires_at: Optional[str] = None
    created_at: str
    updated_at: str
    created: bool = False

    @classmethod
    def from_link(cls, link: ShareableLink, created: bool = False) -> "LinkResponse":
        return cls(
            id=str(link.id),
            document_id=str(link.document_id),
            role=link.role.value,
            token=link.token,
            enabled=link.enabled,
            expires_at=iso(link.expires_at),
            created_at=iso(link.created_at),
            updated_at=iso(link.updated_at),
            created=created,
        )


class ListLinksResponse(BaseModel):
    """Response for list links use case"""

    links: List[LinkResponse]


class ToggleLinksResponse(BaseModel):
    """Response for toggle links use case"""

    enabled: bool
    updated: int


class DeleteLinkResponse(BaseModel):
    """Response for delete link use case"""

    message: str


class LinkGrantResponse(BaseModel):
    """Temporary read-only grant obtained from a link token"""

    document_id: str
    document_name: str
    role: str
    access_token: str
    expires_at: str


class SharedDocumentResponse(BaseModel):
    """Document metadata visible through a link grant"""

    id: str
    name: str
    size_bytes: int
    role: str
    updated_at: str
