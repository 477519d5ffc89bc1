"""
AnnotationSnapshot Entity

The single, versioned annotation payload of a document.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Text
from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utc_now

DEFAULT_ANNOTATION_PAYLOAD = (
    '<?xml version="1.0" encoding="UTF-8" ?>'
    '<xfdf xmlns="http://ns.adobe.com/xfdf/" xml:space="preserve">'
    "<annots></annots></xfdf>"
)


class AnnotationSnapshot(SQLModel, table=True):
    """
    AnnotationSnapshot entity - opaque annotation payload plus version counter.

    Business Rules:
    - One row per document, created lazily on first read
    - Payload is never parsed by the service
    - A write only succeeds when the caller's expected version matches,
      and increments the version by exactly one
    """

    __tablename__ = "annotation_snapshots"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    document_id: UUID = Field(
        foreign_key="documents.id", nullable=False, unique=True, index=True
    )
    payload: str = Field(
        default=DEFAULT_ANNOTATION_PAYLOAD, sa_column=Column(Text, nullable=False)
    )
    version: int = Field(default=0, nullable=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
