from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.adapter.services.memory_cache_store import MemoryCacheStore
from src.app.services.access_cache import AccessCache
from src.app.services.notifier import INotifier
from src.domain.entities import Document, Identity


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_emails = AsyncMock(return_value={})
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)

    uow.documents = MagicMock()
    uow.documents.get_by_id = AsyncMock(return_value=None)
    uow.documents.get_members = AsyncMock(return_value=[])
    uow.documents.add_member = AsyncMock()
    uow.documents.remove_member = AsyncMock(return_value=True)
    uow.documents.create = AsyncMock(side_effect=lambda document: document)
    uow.documents.update = AsyncMock(side_effect=lambda document: document)
    uow.documents.list_accessible = AsyncMock(return_value=[])
    uow.documents.delete_members = AsyncMock()
    uow.documents.delete = AsyncMock()

    uow.invitations = MagicMock()
    uow.invitations.get_by_token = AsyncMock(return_value=None)
    uow.invitations.get_pending_by_document_and_email = AsyncMock(return_value=None)
    uow.invitations.create = AsyncMock(side_effect=lambda invitation: invitation)
    uow.invitations.update = AsyncMock(side_effect=lambda invitation: invitation)
    uow.invitations.delete_by_document = AsyncMock()

    uow.links = MagicMock()
    uow.links.get_by_id = AsyncMock(return_value=None)
    uow.links.get_by_token = AsyncMock(return_value=None)
    uow.links.get_by_document_and_role = AsyncMock(return_value=None)
    uow.links.create = AsyncMock(side_effect=lambda link: link)
    uow.links.delete = AsyncMock()
    uow.links.list_by_document = AsyncMock(return_value=[])
    uow.links.set_enabled_for_document = AsyncMock(return_value=0)
    uow.links.delete_by_document = AsyncMock()

    uow.annotations = MagicMock()
    uow.annotations.get_by_document = AsyncMock(return_value=None)
    uow.annotations.get_or_create = AsyncMock()
    uow.annotations.compare_and_swap = AsyncMock(return_value=True)
    uow.annotations.delete_by_document = AsyncMock()

    return uow


@pytest.fixture
def cache():
    return AccessCache(MemoryCacheStore(key_prefix="test"), max_listing_pages=3)


@pytest.fixture
def notifier():
    return AsyncMock(spec=INotifier)


@pytest.fixture
def owner():
    return Identity(id=uuid4(), email="owner@x.com", name="Owner")


@pytest.fixture
def document(owner):
    return Document(
        id=uuid4(),
        name="report.pdf",
        storage_locator="abc_report.pdf",
        size_bytes=10,
        owner_id=owner.id,
        owner_email=owner.email,
    )
