from uuid import uuid4

import pytest

from src.app.use_cases.sharing import AcceptInvitationUseCase
from src.domain.entities import (
    DocumentMember,
    GrantRole,
    Identity,
    Invitation,
    InvitationStatus,
    User,
)


@pytest.fixture
def invitee():
    return Identity(id=uuid4(), email="new@x.com", name="New")


@pytest.fixture
def invitation(document):
    return Invitation(
        document_id=document.id,
        email="new@x.com",
        role=GrantRole.editor,
        token="token-123",
        status=InvitationStatus.pending,
    )


@pytest.fixture
def setup(mock_uow, document, invitation):
    mock_uow.documents.get_by_id.return_value = document
    mock_uow.invitations.get_by_token.return_value = invitation
    return mock_uow


@pytest.mark.asyncio
async def test_accept_grants_invited_role(setup, cache, document, invitation, invitee):
    # Arrange
    await cache.set_user_role(document.id, "new@x.com", "viewer")
    use_case = AcceptInvitationUseCase(setup, cache)

    # Act
    result = await use_case.execute("token-123", invitee)

    # Assert
    assert result.is_ok()
    assert result.value.role == "editor"
    assert result.value.document_id == str(document.id)

    # Caller becomes a known identity
    setup.users.create.assert_awaited_once()
    created = setup.users.create.await_args.args[0]
    assert created.id == invitee.id
    assert created.email == "new@x.com"

    setup.documents.add_member.assert_awaited_once_with(
        document.id, "new@x.com", GrantRole.editor
    )
    assert invitation.status == InvitationStatus.accepted
    assert invitation.accepted_at is not None
    setup.commit.assert_awaited_once()
    assert await cache.get_user_role(document.id, "new@x.com") is None


@pytest.mark.asyncio
async def test_accept_when_already_member_keeps_role(setup, cache, document, invitee):
    # Arrange
    setup.users.get_by_id.return_value = User(id=invitee.id, email="new@x.com", name="New")
    setup.documents.get_members.return_value = [
        DocumentMember(document_id=document.id, email="new@x.com", role=GrantRole.viewer)
    ]
    use_case = AcceptInvitationUseCase(setup, cache)

    # Act
    result = await use_case.execute("token-123", invitee)

    # Assert
    assert result.is_ok()
    assert result.value.role == "viewer"
    setup.documents.add_member.assert_not_awaited()


@pytest.mark.asyncio
async def test_unknown_token(mock_uow, cache, invitee):
    use_case = AcceptInvitationUseCase(mock_uow, cache)

    result = await use_case.execute("missing", invitee)

    assert result.is_err()
    assert result.error.code == "INVITATION_NOT_FOUND"


@pytest.mark.asyncio
async def test_already_accepted(setup, cache, invitation, invitee):
    invitation.status = InvitationStatus.accepted
    use_case = AcceptInvitationUseCase(setup, cache)

    result = await use_case.execute("token-123", invitee)

    assert result.is_err()
    assert result.error.code == "INVITATION_ALREADY_ACCEPTED"


@pytest.mark.asyncio
async def test_email_mismatch(setup, cache):
    someone_else = Identity(id=uuid4(), email="other@x.com")
    use_case = AcceptInvitationUseCase(setup, cache)

    result = await use_case.execute("token-123", someone_else)

    assert result.is_err()
    assert result.error.code == "EMAIL_MISMATCH"
    setup.documents.add_member.assert_not_awaited()
