from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.adapter.services.local_storage import LocalStorage
from src.adapter.services.smtp_notifier import SmtpNotifier
from src.app.services.notifier import deliver_safely
from src.app.services.storage import StorageError


@pytest.mark.asyncio
async def test_local_storage_round_trip(tmp_path):
    storage = LocalStorage(str(tmp_path))

    locator = await storage.store(b"bytes", "../../etc/my report.pdf")

    assert "/" not in locator
    assert locator.endswith("my_report.pdf")
    assert await storage.retrieve(locator) == b"bytes"

    await storage.delete(locator)
    await storage.delete(locator)  # deleting twice is harmless
    with pytest.raises(StorageError):
        await storage.retrieve(locator)


@pytest.mark.asyncio
async def test_local_storage_rejects_paths(tmp_path):
    storage = LocalStorage(str(tmp_path))

    with pytest.raises(StorageError):
        await storage.retrieve("../secret")


@pytest.mark.asyncio
async def test_smtp_invitation_carries_accept_link():
    notifier = SmtpNotifier(
        host="smtp.test",
        port=587,
        from_address="noreply@docs.test",
        app_base_url="https://docs.test/",
        username="user",
        password="pass",
    )
    server = MagicMock()

    with patch("src.adapter.services.smtp_notifier.smtplib.SMTP", return_value=server) as smtp:
        await notifier.send_invitation("new@x.com", "tok123", "plan.pdf")

    smtp.assert_called_once_with("smtp.test", 587, timeout=10)
    server.starttls.assert_called_once()
    server.login.assert_called_once_with("user", "pass")
    message = server.send_message.call_args.args[0]
    assert message["To"] == "new@x.com"
    assert "plan.pdf" in message["Subject"]
    assert "https://docs.test/invitations/accept?token=tok123" in message.get_payload()
    server.quit.assert_called_once()


@pytest.mark.asyncio
async def test_smtp_connection_is_closed_on_failure():
    notifier = SmtpNotifier("smtp.test", 25, "noreply@docs.test", "http://docs", use_tls=False)
    server = MagicMock()
    server.send_message.side_effect = OSError("refused")

    with patch("src.adapter.services.smtp_notifier.smtplib.SMTP", return_value=server):
        with pytest.raises(OSError):
            await notifier.send_role_removed("a@x.com", "plan.pdf")

    server.starttls.assert_not_called()
    server.login.assert_not_called()
    server.quit.assert_called_once()


@pytest.mark.asyncio
async def test_deliver_safely_swallows_failures():
    failing = AsyncMock(side_effect=ConnectionError("smtp down"))
    working = AsyncMock()

    assert await deliver_safely(failing(), "invitation to a@x.com") is False
    assert await deliver_safely(working(), "invitation to b@x.com") is True
