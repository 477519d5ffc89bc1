"""
Document Sharing Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class DocumentRole(str, Enum):
    """
    Resolved access level of an identity on a document.

    Totally ordered: none < viewer < editor < owner.
    """

    none = "none"
    viewer = "viewer"
    editor = "editor"
    owner = "owner"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]

    def at_least(self, other: "DocumentRole") -> bool:
        return self.rank >= other.rank


_ROLE_RANK = {
    DocumentRole.none: 0,
    DocumentRole.viewer: 1,
    DocumentRole.editor: 2,
    DocumentRole.owner: 3,
}


class GrantRole(str, Enum):
    """Roles that can be granted to someone other than the owner"""

    viewer = "viewer"
    editor = "editor"

    def as_document_role(self) -> DocumentRole:
        return DocumentRole(self.value)


class InvitationStatus(str, Enum):
    """Invitation status"""

    pending = "pending"
    accepted = "accepted"


class SortOrder(str, Enum):
    """Document listing order on updated_at"""

    asc = "ASC"
    desc = "DESC"
