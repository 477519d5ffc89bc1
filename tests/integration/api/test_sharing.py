import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import Invitation


async def invitations_for(db_session, email):
    result = await db_session.exec(select(Invitation).where(Invitation.email == email))
    return result.all()


@pytest.mark.asyncio
async def test_invite_unknown_email_creates_invitation(
    client: AsyncClient, db_session, auth, upload, notifier
):
    """Unknown email: an invitation is recorded and the email still has no access"""
    document_id = await upload("owner@x.com")

    response = await client.post(
        f"/documents/{document_id}/invite",
        json={"emails": ["new@x.com"], "role": "editor"},
        headers=auth("owner@x.com"),
    )

    assert response.status_code == 200
    assert response.json()["results"] == [{"email": "new@x.com", "status": "invited"}]

    invitations = await invitations_for(db_session, "new@x.com")
    assert len(invitations) == 1
    assert invitations[0].role.value == "editor"

    role = await client.get(f"/documents/{document_id}/role", headers=auth("new@x.com"))
    assert role.status_code == 403
    assert [entry[1] for entry in notifier.of_kind("invitation")] == ["new@x.com"]


@pytest.mark.asyncio
async def test_invite_known_identity_grants_access(
    client: AsyncClient, db_session, auth, upload, notifier
):
    """Known identity: added to the viewer set at once, no invitation row"""
    await client.post("/identities/register", headers=auth("known@x.com"))
    document_id = await upload("owner@x.com")

    response = await client.post(
        f"/documents/{document_id}/invite",
        json={"emails": ["known@x.com"], "role": "viewer"},
        headers=auth("owner@x.com"),
    )

    assert response.status_code == 200
    assert response.json()["results"] == [{"email": "known@x.com", "status": "granted"}]
    assert await invitations_for(db_session, "known@x.com") == []

    info = await client.get(f"/documents/{document_id}", headers=auth("owner@x.com"))
    assert info.json()["viewers"] == ["known@x.com"]
    assert notifier.of_kind("access_granted") == [("access_granted", "known@x.com", "viewer")]


@pytest.mark.asyncio
async def test_repeated_invites_are_idempotent(client: AsyncClient, db_session, auth, upload):
    await client.post("/identities/register", headers=auth("known@x.com"))
    document_id = await upload("owner@x.com")
    payload = {"emails": ["known@x.com", "new@x.com"], "role": "viewer"}

    await client.post(f"/documents/{document_id}/invite", json=payload, headers=auth("owner@x.com"))
    again = await client.post(
        f"/documents/{document_id}/invite", json=payload, headers=auth("owner@x.com")
    )

    assert again.status_code == 200
    assert again.json()["results"] == [
        {"email": "known@x.com", "status": "skipped"},
        {"email": "new@x.com", "status": "already_invited"},
    ]
    assert len(await invitations_for(db_session, "new@x.com")) == 1
    info = await client.get(f"/documents/{document_id}", headers=auth("owner@x.com"))
    assert info.json()["viewers"] == ["known@x.com"]
    assert info.json()["editors"] == []


@pytest.mark.asyncio
async def test_only_owner_invites(client: AsyncClient, auth, upload):
    document_id = await upload("owner@x.com")

    response = await client.post(
        f"/documents/{document_id}/invite",
        json={"emails": ["a@x.com"], "role": "viewer"},
        headers=auth("intruder@x.com"),
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "NOT_OWNER"


@pytest.mark.asyncio
async def test_invite_rejects_bad_input(client: AsyncClient, auth, upload):
    document_id = await upload("owner@x.com")

    bad_role = await client.post(
        f"/documents/{document_id}/invite",
        json={"emails": ["a@x.com"], "role": "owner"},
        headers=auth("owner@x.com"),
    )
    bad_email = await client.post(
        f"/documents/{document_id}/invite",
        json={"emails": ["a@x.com", "not-an-email"], "role": "viewer"},
        headers=auth("owner@x.com"),
    )

    assert bad_role.status_code == 400
    assert bad_role.json()["error"]["code"] == "INVALID_ROLE"
    assert bad_email.status_code == 400
    assert bad_email.json()["error"]["code"] == "INVALID_EMAIL"


@pytest.mark.asyncio
async def test_change_role_then_remove(client: AsyncClient, auth, upload, notifier):
    # Arrange
    await client.post("/identities/register", headers=auth("a@x.com"))
    document_id = await upload("owner@x.com")
    await client.post(
        f"/documents/{document_id}/invite",
        json={"emails": ["a@x.com"], "role": "viewer"},
        headers=auth("owner@x.com"),
    )
    # Warm the role cache with the pre-mutation value
    before = await client.get(f"/documents/{document_id}/role", headers=auth("a@x.com"))
    assert before.json()["role"] == "viewer"

    # Act
    promoted = await client.post(
        f"/documents/{document_id}/roles",
        json={"email": "a@x.com", "role": "editor"},
        headers=auth("owner@x.com"),
    )
    role_after_promotion = await client.get(
        f"/documents/{document_id}/role", headers=auth("a@x.com")
    )
    removed = await client.post(
        f"/documents/{document_id}/roles",
        json={"email": "a@x.com", "role": "none"},
        headers=auth("owner@x.com"),
    )
    role_after_removal = await client.get(
        f"/documents/{document_id}/role", headers=auth("a@x.com")
    )

    # Assert
    assert promoted.status_code == 200
    assert promoted.json()["message"] == "Role changed successfully"
    assert role_after_promotion.json()["role"] == "editor"

    assert removed.status_code == 200
    assert removed.json()["message"] == "Role removed successfully"
    assert role_after_removal.status_code == 403

    assert notifier.of_kind("role_changed") == [("role_changed", "a@x.com", "editor")]
    assert notifier.of_kind("role_removed") == [("role_removed", "a@x.com", None)]


@pytest.mark.asyncio
async def test_owner_role_cannot_change(client: AsyncClient, auth, upload):
    document_id = await upload("owner@x.com")

    response = await client.post(
        f"/documents/{document_id}/roles",
        json={"email": "owner@x.com", "role": "viewer"},
        headers=auth("owner@x.com"),
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "CANNOT_CHANGE_OWNER"


@pytest.mark.asyncio
async def test_batch_role_changes(client: AsyncClient, auth, upload):
    document_id = await upload("owner@x.com")

    response = await client.post(
        f"/documents/{document_id}/roles/batch",
        json={
            "changes": [
                {"email": "a@x.com", "role": "editor"},
                {"email": "b@x.com", "role": "viewer"},
                {"email": "owner@x.com", "role": "viewer"},
            ]
        },
        headers=auth("owner@x.com"),
    )

    assert response.status_code == 200
    results = response.json()["results"]
    assert [r["status"] for r in results] == ["updated", "updated", "error"]
    assert results[2]["code"] == "CANNOT_CHANGE_OWNER"

    info = await client.get(f"/documents/{document_id}", headers=auth("owner@x.com"))
    assert info.json()["editors"] == ["a@x.com"]
    assert info.json()["viewers"] == ["b@x.com"]


@pytest.mark.asyncio
async def test_batch_role_changes_by_non_owner_fail_once(client: AsyncClient, auth, upload):
    document_id = await upload("owner@x.com")

    response = await client.post(
        f"/documents/{document_id}/roles/batch",
        json={"changes": [{"email": "a@x.com", "role": "editor"}, {"email": "b@x.com", "role": None}]},
        headers=auth("stranger@x.com"),
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "NOT_OWNER"
