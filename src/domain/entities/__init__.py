"""
Document Sharing Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    DocumentRole,
    GrantRole,
    InvitationStatus,
    SortOrder,
)

# Export all entities
from .user import User
from .identity import Identity
from .document import Document, DocumentMember
from .invitation import Invitation
from .shareable_link import ShareableLink
from .annotation_snapshot import AnnotationSnapshot, DEFAULT_ANNOTATION_PAYLOAD

__all__ = [
    # Enums
    "DocumentRole",
    "GrantRole",
    "InvitationStatus",
    "SortOrder",
    # Entities
    "User",
    "Identity",
    "Document",
    "DocumentMember",
    "Invitation",
    "ShareableLink",
    "AnnotationSnapshot",
    "DEFAULT_ANNOTATION_PAYLOAD",
]
