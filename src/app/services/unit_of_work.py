from abc import ABC, abstractmethod

from src.app.repositories.annotation_repository import IAnnotationRepository
from src.app.repositories.document_repository import IDocumentRepository
from src.app.repositories.invitation_repository import IInvitationRepository
from src.app.repositories.shareable_link_repository import IShareableLinkRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    documents: IDocumentRepository
    invitations: IInvitationRepository
    links: IShareableLinkRepository
    annotations: IAnnotationRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
