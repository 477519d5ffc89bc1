"""
ShareableLink Entity

Identity-independent, token based access grants.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import GrantRole


class ShareableLink(SQLModel, table=True):
    """
    ShareableLink entity - a togglable, role-scoped link to a document.

    Business Rules:
    - At most one link per (document, role)
    - Disabling is reversible, deletion is terminal
    - A disabled or expired link is treated as if it did not exist
    - Never grants document membership
    """

    __tablename__ = "shareable_links"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    document_id: UUID = Field(foreign_key="documents.id", nullable=False, index=True)
    role: GrantRole = Field(nullable=False)
    token: str = Field(unique=True, index=True, max_length=64)

    enabled: bool = Field(default=True)
    expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_shareable_link_document_role", "document_id", "role", unique=True),
    )

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at <= now

    def is_usable(self, now: datetime) -> bool:
        return self.enabled and not self.is_expired(now)
