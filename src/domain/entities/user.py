"""
User Entity

A known identity, registered from an identity provider assertion.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utc_now


class User(SQLModel, table=True):
    """
    User entity - an identity known to the sharing service.

    Business Rules:
    - id is the stable identifier issued by the identity provider
    - Email must be unique across all users (stored normalised)
    - No credentials are stored here
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    name: str = Field(default="", max_length=255)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
