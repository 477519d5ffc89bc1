from uuid import uuid4

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_upload_and_download(client: AsyncClient, auth):
    response = await client.post(
        "/documents",
        files={"file": ("report.pdf", b"%PDF-1.4 hello", "application/pdf")},
        headers=auth("owner@x.com"),
    )

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "report.pdf"
    assert data["size_bytes"] == len(b"%PDF-1.4 hello")

    download = await client.get(
        f"/documents/{data['id']}/download", headers=auth("owner@x.com")
    )
    assert download.status_code == 200
    assert download.content == b"%PDF-1.4 hello"
    assert "report.pdf" in download.headers["content-disposition"]


@pytest.mark.asyncio
async def test_upload_empty_file(client: AsyncClient, auth):
    response = await client.post(
        "/documents",
        files={"file": ("empty.pdf", b"", "application/pdf")},
        headers=auth("owner@x.com"),
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "EMPTY_FILE"


@pytest.mark.asyncio
async def test_listing_reports_role_and_owner(client: AsyncClient, auth, upload):
    # Arrange
    await client.post("/identities/register", headers=auth("viewer@x.com"))
    first = await upload("owner@x.com", name="a.pdf")
    await upload("owner@x.com", name="b.pdf")
    await client.post(
        f"/documents/{first}/invite",
        json={"emails": ["viewer@x.com"], "role": "viewer"},
        headers=auth("owner@x.com"),
    )

    # Act
    owner_list = await client.get("/documents", headers=auth("owner@x.com"))
    viewer_list = await client.get("/documents?sort=ASC", headers=auth("viewer@x.com"))
    total = await client.get("/documents/total", headers=auth("owner@x.com"))

    # Assert
    assert owner_list.status_code == 200
    assert len(owner_list.json()["items"]) == 2
    assert {item["role"] for item in owner_list.json()["items"]} == {"owner"}
    assert total.json()["total"] == 2

    items = viewer_list.json()["items"]
    assert [item["id"] for item in items] == [first]
    assert items[0]["role"] == "viewer"
    assert items[0]["owner"] == "Owner"
    assert viewer_list.json()["sort"] == "ASC"


@pytest.mark.asyncio
async def test_listing_rejects_bad_sort(client: AsyncClient, auth):
    response = await client.get("/documents?sort=sideways", headers=auth("owner@x.com"))

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_SORT"


@pytest.mark.asyncio
async def test_info_and_role_for_stranger(client: AsyncClient, auth, upload):
    document_id = await upload("owner@x.com")

    info = await client.get(f"/documents/{document_id}", headers=auth("owner@x.com"))
    stranger_info = await client.get(f"/documents/{document_id}", headers=auth("eve@x.com"))
    stranger_role = await client.get(f"/documents/{document_id}/role", headers=auth("eve@x.com"))

    assert info.status_code == 200
    assert info.json()["role"] == "owner"
    assert info.json()["owner"]["email"] == "owner@x.com"
    assert stranger_info.status_code == 403
    assert stranger_role.status_code == 403
    assert stranger_role.json()["error"]["code"] == "NO_ACCESS"


@pytest.mark.asyncio
async def test_unknown_and_malformed_ids(client: AsyncClient, auth):
    missing = await client.get(f"/documents/{uuid4()}", headers=auth("owner@x.com"))
    malformed = await client.get("/documents/not-a-uuid", headers=auth("owner@x.com"))

    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "DOCUMENT_NOT_FOUND"
    assert malformed.status_code == 400
    assert malformed.json()["error"]["code"] == "INVALID_DOCUMENT_ID"


@pytest.mark.asyncio
async def test_users_is_owner_only(client: AsyncClient, auth, upload):
    # Arrange
    document_id = await upload("owner@x.com")
    await client.post(
        f"/documents/{document_id}/invite",
        json={"emails": ["ghost@x.com"], "role": "viewer"},
        headers=auth("owner@x.com"),
    )
    await client.post("/identities/register", headers=auth("ed@x.com", "Ed"))
    await client.post(
        f"/documents/{document_id}/invite",
        json={"emails": ["ed@x.com"], "role": "editor"},
        headers=auth("owner@x.com"),
    )

    # Act
    response = await client.get(f"/documents/{document_id}/users", headers=auth("owner@x.com"))
    forbidden = await client.get(f"/documents/{document_id}/users", headers=auth("ed@x.com"))

    # Assert
    assert response.status_code == 200
    users = {(u["email"], u["role"], u["name"]) for u in response.json()["users"]}
    assert users == {("owner@x.com", "owner", "Owner"), ("ed@x.com", "editor", "Ed")}
    assert forbidden.status_code == 403


@pytest.mark.asyncio
async def test_delete_removes_everything(client: AsyncClient, auth, upload, storage):
    # Arrange
    document_id = await upload("owner@x.com")
    await client.post("/identities/register", headers=auth("viewer@x.com"))
    await client.post(
        f"/documents/{document_id}/invite",
        json={"emails": ["viewer@x.com"], "role": "viewer"},
        headers=auth("owner@x.com"),
    )
    await client.post(
        f"/documents/{document_id}/links", json={"role": "viewer"}, headers=auth("owner@x.com")
    )
    # Warm the viewer's listing cache
    before = await client.get("/documents", headers=auth("viewer@x.com"))
    assert len(before.json()["items"]) == 1

    # Act
    forbidden = await client.delete(f"/documents/{document_id}", headers=auth("viewer@x.com"))
    response = await client.delete(f"/documents/{document_id}", headers=auth("owner@x.com"))

    # Assert
    assert forbidden.status_code == 403
    assert response.status_code == 200
    assert response.json()["message"] == "Document deleted successfully"

    gone = await client.get(f"/documents/{document_id}", headers=auth("owner@x.com"))
    assert gone.status_code == 404
    after = await client.get("/documents", headers=auth("viewer@x.com"))
    assert after.json()["items"] == []
    assert list(storage.root.iterdir()) == []
