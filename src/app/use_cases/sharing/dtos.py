"""
Sharing Use Case DTOs (Data Transfer Objects)

Command and Response classes for invitations and role mutation.
"""

from typing import List, Optional

from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class RoleChange(BaseModel):
    """One entry of a batch role change; role None removes access"""

    email: str
    role: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class InviteOutcome(BaseModel):
    """
    Per-email result of an invite request.

    status is one of: granted, invited, already_invited, skipped
    """

    email: str
    status: str


class InviteUsersResponse(BaseModel):
    """Response for invite users use case"""

    message: str
    results: List[InviteOutcome]


class ChangeRoleResponse(BaseModel):
    """Response for change role use case"""

    message: str
    email: str
    role: str


class RoleChangeResult(BaseModel):
    """
    Per-entry result of a batch role change.

    status is "updated" (role set) or "error" (code and message set)
    """

    email: str
    status: str
    role: Optional[str] = None
    code: Optional[str] = None
    message: Optional[str] = None


class ChangeRolesResponse(BaseModel):
    """Response for change roles use case"""

    message: str
    results: List[RoleChangeResult]


class AcceptInvitationResponse(BaseModel):
    """Response for accept invitation use case"""

    document_id: str
    document_name: str
    role: str
    status: str
