from uuid import UUID

from pydantic import BaseModel


class Identity(BaseModel):
    """Authenticated caller, as asserted by the identity provider token."""

    id: UUID
    email: str
    name: str = ""
