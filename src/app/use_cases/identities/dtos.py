from pydantic import BaseModel


class RegisterIdentityResponse(BaseModel):
    """Response for register identity use case"""

    id: str
    email: str
    name: str
    created_at: str
    pending_invitations: int
