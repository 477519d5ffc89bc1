"""
Sharing Use Cases

Invitations and role mutation on documents.
"""

from .accept_invitation_use_case import AcceptInvitationUseCase
from .change_role_use_case import ChangeRoleUseCase
from .change_roles_use_case import ChangeRolesUseCase
from .dtos import (
    AcceptInvitationResponse,
    ChangeRoleResponse,
    ChangeRolesResponse,
    InviteOutcome,
    InviteUsersResponse,
    RoleChange,
    RoleChangeResult,
)
from .invite_users_use_case import InviteUsersUseCase

__all__ = [
    "InviteUsersUseCase",
    "AcceptInvitationUseCase",
    "ChangeRoleUseCase",
    "ChangeRolesUseCase",
    "RoleChange",
    "InviteOutcome",
    "InviteUsersResponse",
    "AcceptInvitationResponse",
    "ChangeRoleResponse",
    "RoleChangeResult",
    "ChangeRolesResponse",
]
