from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.app.services.storage import IStorage
from src.app.use_cases.documents import (
    DeleteDocumentUseCase,
    GetDocumentInfoUseCase,
    GetUserRoleUseCase,
    ListDocumentsUseCase,
    ListDocumentUsersUseCase,
    UploadDocumentUseCase,
)
from src.domain.entities import DocumentMember, GrantRole, Identity, SortOrder, User


@pytest.fixture
def storage():
    storage = AsyncMock(spec=IStorage)
    storage.store.return_value = "locator"
    return storage


@pytest.fixture
def setup(mock_uow, document):
    mock_uow.documents.get_by_id.return_value = document
    mock_uow.documents.get_members.return_value = [
        DocumentMember(document_id=document.id, email="viewer@x.com", role=GrantRole.viewer),
    ]
    return mock_uow


@pytest.mark.asyncio
async def test_upload_creates_owner_and_document(setup, cache, storage, owner):
    # Arrange
    await cache.set_user_file_list(owner.id, 0, SortOrder.desc, {"items": []})
    use_case = UploadDocumentUseCase(setup, storage, cache, max_upload_bytes=100)

    # Act
    result = await use_case.execute(owner, "notes.pdf", b"%PDF-1.4")

    # Assert
    assert result.is_ok()
    assert result.value.name == "notes.pdf"
    assert result.value.size_bytes == 8
    storage.store.assert_awaited_once_with(b"%PDF-1.4", "notes.pdf")
    created = setup.documents.create.await_args.args[0]
    assert created.owner_id == owner.id
    assert created.owner_email == "owner@x.com"
    assert await cache.get_user_file_list(owner.id, 0, SortOrder.desc) is None


@pytest.mark.asyncio
async def test_upload_removes_stored_bytes_when_row_fails(setup, cache, storage, owner):
    setup.documents.create.side_effect = RuntimeError("db down")
    use_case = UploadDocumentUseCase(setup, storage, cache, max_upload_bytes=100)

    with pytest.raises(RuntimeError):
        await use_case.execute(owner, "notes.pdf", b"data")

    storage.delete.assert_awaited_once_with("locator")


@pytest.mark.asyncio
@pytest.mark.parametrize("content, code", [(b"", "EMPTY_FILE"), (b"x" * 101, "FILE_TOO_LARGE")])
async def test_upload_validation(setup, cache, storage, owner, content, code):
    use_case = UploadDocumentUseCase(setup, storage, cache, max_upload_bytes=100)

    result = await use_case.execute(owner, "f.pdf", content)

    assert result.is_err()
    assert result.error.code == code
    storage.store.assert_not_awaited()


@pytest.mark.asyncio
async def test_list_serves_cached_page(setup, cache, owner):
    # Arrange
    cached = {"items": [], "page": 0, "per_page": 10, "sort": "DESC"}
    await cache.set_user_file_list(owner.id, 0, SortOrder.desc, cached)
    use_case = ListDocumentsUseCase(setup, cache)

    # Act
    result = await use_case.execute(owner, 0, "desc")

    # Assert
    assert result.is_ok()
    setup.documents.list_accessible.assert_not_awaited()


@pytest.mark.asyncio
async def test_list_reports_caller_role(setup, cache, document):
    # Arrange
    viewer = Identity(id=uuid4(), email="viewer@x.com")
    setup.documents.list_accessible.return_value = [(document, GrantRole.viewer)]
    setup.users.get_by_emails.return_value = {
        "owner@x.com": User(id=document.owner_id, email="owner@x.com", name="Owner")
    }
    use_case = ListDocumentsUseCase(setup, cache, per_page=10)

    # Act
    result = await use_case.execute(viewer, 1, "ASC")

    # Assert
    item = result.value.items[0]
    assert item.role == "viewer"
    assert item.owner == "Owner"
    setup.documents.list_accessible.assert_awaited_once_with(
        "viewer@x.com", offset=10, limit=10, descending=False
    )
    assert await cache.get_user_file_list(viewer.id, 1, SortOrder.asc) is not None


@pytest.mark.asyncio
@pytest.mark.parametrize("page, sort, code", [(-1, "DESC", "INVALID_PAGE"), (0, "UP", "INVALID_SORT")])
async def test_list_validation(setup, cache, owner, page, sort, code):
    use_case = ListDocumentsUseCase(setup, cache)

    result = await use_case.execute(owner, page, sort)

    assert result.error.code == code


@pytest.mark.asyncio
async def test_role_is_cached_and_none_is_forbidden(setup, cache, document):
    viewer = Identity(id=uuid4(), email="viewer@x.com")
    stranger = Identity(id=uuid4(), email="stranger@x.com")
    use_case = GetUserRoleUseCase(setup, cache)

    result = await use_case.execute(document.id, viewer)
    assert result.value.role == "viewer"
    assert await cache.get_user_role(document.id, "viewer@x.com") == "viewer"

    result = await use_case.execute(document.id, stranger)
    assert result.error.code == "NO_ACCESS"
    assert await cache.get_user_role(document.id, "stranger@x.com") is None


@pytest.mark.asyncio
async def test_info_cache_hit_is_still_authorized(setup, cache, document):
    viewer = Identity(id=uuid4(), email="viewer@x.com")
    stranger = Identity(id=uuid4(), email="stranger@x.com")
    use_case = GetDocumentInfoUseCase(setup, cache)

    first = await use_case.execute(document.id, viewer)
    assert first.value.role == "viewer"
    assert first.value.viewers == ["viewer@x.com"]

    setup.documents.get_by_id.reset_mock()
    second = await use_case.execute(document.id, stranger)

    assert second.error.code == "NO_ACCESS"
    setup.documents.get_by_id.assert_not_awaited()


@pytest.mark.asyncio
async def test_users_list_marks_unregistered(setup, cache, owner, document):
    setup.users.get_by_emails.return_value = {
        "owner@x.com": User(id=owner.id, email="owner@x.com", name="Owner")
    }
    use_case = ListDocumentUsersUseCase(setup, cache)

    result = await use_case.execute(document.id, owner)

    users = [(u.email, u.name, u.role) for u in result.value.users]
    assert users == [
        ("owner@x.com", "Owner", "owner"),
        ("viewer@x.com", "[Unregistered User]", "viewer"),
    ]


@pytest.mark.asyncio
async def test_delete_requires_owner_and_cleans_up(setup, cache, storage, owner, document):
    # Arrange
    viewer = Identity(id=uuid4(), email="viewer@x.com")
    await cache.set_file_info(document.id, {})
    use_case = DeleteDocumentUseCase(setup, storage, cache)

    # Act
    forbidden = await use_case.execute(document.id, viewer)
    result = await use_case.execute(document.id, owner)

    # Assert
    assert forbidden.error.code == "NOT_OWNER"
    assert result.is_ok()
    setup.documents.delete.assert_awaited_once_with(document.id)
    storage.delete.assert_awaited_once_with(document.storage_locator)
    assert await cache.get_file_info(document.id) is None


@pytest.mark.asyncio
async def test_delete_invalidates_caches_when_storage_fails(
    setup, cache, storage, owner, document
):
    """The document is gone once its rows are; lost bytes only leave an orphan file"""
    # Arrange
    storage.delete.side_effect = OSError("disk unavailable")
    await cache.set_file_info(document.id, {})
    await cache.set_user_role(document.id, "viewer@x.com", "viewer")
    await cache.set_user_file_list(document.owner_id, 0, SortOrder.desc, {"items": []})
    use_case = DeleteDocumentUseCase(setup, storage, cache)

    # Act
    result = await use_case.execute(document.id, owner)

    # Assert
    assert result.is_ok()
    storage.delete.assert_awaited_once_with(document.storage_locator)
    assert await cache.get_file_info(document.id) is None
    assert await cache.get_user_role(document.id, "viewer@x.com") is None
    assert await cache.get_user_file_list(document.owner_id, 0, SortOrder.desc) is None
