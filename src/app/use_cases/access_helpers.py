"""
Helpers shared by document, sharing, link and annotation use cases.
"""

from typing import Optional, Tuple
from uuid import UUID

from libs.result import Error
from src.app.services.unit_of_work import UnitOfWork
from src.domain.access import DocumentAccess
from src.domain.emails import normalize_email
from src.domain.entities import Document, Identity, User

UNREGISTERED_USER_NAME = "[Unregistered User]"

DOCUMENT_NOT_FOUND = Error("DOCUMENT_NOT_FOUND", "Document not found")
EMAIL_TAKEN = Error("EMAIL_TAKEN", "This email is registered to another identity")
NOT_OWNER = Error("NOT_OWNER", "Only the document owner can perform this action")
NO_ACCESS = Error("NO_ACCESS", "You do not have access to this document")


async def load_document_access(
    uow: UnitOfWork, document_id: UUID
) -> Optional[Tuple[Document, DocumentAccess]]:
    """
    Load a document with its full viewer/editor sets.

    Must be called inside the unit of work context.

    Returns:
        (document, access) or None if the document does not exist
    """
    document = await uow.documents.get_by_id(document_id)
    if document is None:
        return None
    members = await uow.documents.get_members(document_id)
    return document, DocumentAccess.build(document, members)


async def ensure_user(uow: UnitOfWork, identity: Identity) -> Optional[User]:
    """
    Get the caller's User row, creating it from the token claims if missing.

    Returns:
        The user, or None if the email is registered under another id
    """
    email = normalize_email(identity.email)
    user = await uow.users.get_by_id(identity.id)
    if user is not None:
        if identity.name and user.name != identity.name:
            user.name = identity.name
            user = await uow.users.update(user)
        return user

    if await uow.users.get_by_email(email) is not None:
        return None

    return await uow.users.create(User(id=identity.id, email=email, name=identity.name))


def iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None
