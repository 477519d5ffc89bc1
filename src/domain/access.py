"""
Access resolution.

Every authorization decision in the service goes through `resolve_role`.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional
from uuid import UUID

from src.domain.emails import normalize_email
from src.domain.entities import Document, DocumentMember, DocumentRole, GrantRole


@dataclass(frozen=True)
class DocumentAccess:
    """Membership data of one document, as needed to resolve roles."""

    document_id: UUID
    owner_id: UUID
    owner_email: str
    viewers: FrozenSet[str] = field(default_factory=frozenset)
    editors: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def build(
        cls, document: Document, members: Iterable[DocumentMember]
    ) -> "DocumentAccess":
        viewers = set()
        editors = set()
        for member in members:
            if member.role == GrantRole.editor:
                editors.add(member.email)
            else:
                viewers.add(member.email)
        return cls(
            document_id=document.id,
            owner_id=document.owner_id,
            owner_email=document.owner_email,
            viewers=frozenset(viewers),
            editors=frozenset(editors),
        )

    @classmethod
    def for_member(
        cls, document: Document, email: str, role: Optional[GrantRole]
    ) -> "DocumentAccess":
        """Partial view holding only one member, enough to resolve that member."""
        viewers = frozenset([email]) if role == GrantRole.viewer else frozenset()
        editors = frozenset([email]) if role == GrantRole.editor else frozenset()
        return cls(
            document_id=document.id,
            owner_id=document.owner_id,
            owner_email=document.owner_email,
            viewers=viewers,
            editors=editors,
        )

    def with_member(self, email: str, role: GrantRole) -> "DocumentAccess":
        viewers = self.viewers - {email}
        editors = self.editors - {email}
        if role == GrantRole.editor:
            editors = editors | {email}
        else:
            viewers = viewers | {email}
        return DocumentAccess(
            document_id=self.document_id,
            owner_id=self.owner_id,
            owner_email=self.owner_email,
            viewers=viewers,
            editors=editors,
        )

    def member_emails(self) -> FrozenSet[str]:
        return self.viewers | self.editors


def resolve_role(access: DocumentAccess, email: str) -> DocumentRole:
    """
    Map (document, identity email) to exactly one role.

    Owner first, then viewer set, then editor set, otherwise none.
    """
    email = normalize_email(email)
    if access.owner_email == email:
        return DocumentRole.owner
    if email in access.viewers:
        return DocumentRole.viewer
    if email in access.editors:
        return DocumentRole.editor
    return DocumentRole.none
