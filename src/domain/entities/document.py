"""
Document Entities

The shareable unit and its viewer/editor membership rows.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import GrantRole


class Document(SQLModel, table=True):
    """
    Document entity - an uploaded file that can be shared.

    Business Rules:
    - owner_email is denormalised from the owner for fast role resolution
    - storage_locator is opaque, owned by the storage backend
    - Deleting a document removes members, invitations, links and annotations
    """

    __tablename__ = "documents"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    storage_locator: str = Field(max_length=512)
    size_bytes: int = Field(default=0)

    owner_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    owner_email: str = Field(max_length=255, nullable=False, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_document_updated_at", "updated_at"),)


class DocumentMember(SQLModel, table=True):
    """
    DocumentMember entity - one email in the viewer or editor set of a document.

    Business Rules:
    - (document_id, email) is unique: an email is never both viewer and editor
    - The owner email is never stored as a member
    - Emails need not belong to a known identity
    """

    __tablename__ = "document_members"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    document_id: UUID = Field(foreign_key="documents.id", nullable=False, index=True)
    email: str = Field(max_length=255, nullable=False)
    role: GrantRole = Field(nullable=False)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_document_member_document_email", "document_id", "email", unique=True),
        Index("idx_document_member_email", "email"),
    )
