"""
Invitation Entity

Pending grants for emails that have no known identity yet.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import GrantRole, InvitationStatus


class Invitation(SQLModel, table=True):
    """
    Invitation entity - a pending grant for an unregistered email.

    Business Rules:
    - Only created when the invited email has no known identity
    - At most one pending invitation per (document, email)
    - Token is single-use, cryptographically secure
    - Accepting it adds the email to the requested role set
    """

    __tablename__ = "invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    document_id: UUID = Field(foreign_key="documents.id", nullable=False, index=True)
    email: str = Field(max_length=255, nullable=False, index=True)

    role: GrantRole = Field(nullable=False)
    token: str = Field(unique=True, index=True, max_length=64)

    status: InvitationStatus = Field(default=InvitationStatus.pending)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    accepted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_invitation_document_email", "document_id", "email"),
        Index("idx_invitation_status", "status"),
    )
