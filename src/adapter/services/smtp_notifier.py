"""
SMTP Notifier

Plain text emails through the standard library SMTP client, executed in a
worker thread so the event loop is never blocked.
"""

import asyncio
import logging
import smtplib
from email.mime.text import MIMEText
from typing import Optional

from src.app.services.notifier import INotifier

logger = logging.getLogger(__name__)


class SmtpNotifier(INotifier):
    def __init__(
        self,
        host: str,
        port: int,
        from_address: str,
        app_base_url: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        timeout_seconds: int = 10,
    ):
        self.host = host
        self.port = port
        self.from_address = from_address
        self.app_base_url = app_base_url.rstrip("/")
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout_seconds = timeout_seconds

    async def send_invitation(self, email: str, token: str, document_name: str) -> None:
        link = f"{self.app_base_url}/invitations/accept?token={token}"
        body = (
            f"You have been invited to collaborate on '{document_name}'.\n\n"
            f"Sign up and accept the invitation here:\n{link}\n"
        )
        await self._send(email, f"Invitation to '{document_name}'", body)

    async def send_access_granted(self, email: str, document_name: str, role: str) -> None:
        body = (
            f"You now have {role} access to '{document_name}'.\n\n"
            f"Open it here: {self.app_base_url}\n"
        )
        await self._send(email, f"Access granted to '{document_name}'", body)

    async def send_role_changed(self, email: str, document_name: str, role: str) -> None:
        body = f"Your role on '{document_name}' is now {role}.\n"
        await self._send(email, f"Role changed on '{document_name}'", body)

    async def send_role_removed(self, email: str, document_name: str) -> None:
        body = f"Your access to '{document_name}' has been removed.\n"
        await self._send(email, f"Access removed from '{document_name}'", body)

    async def _send(self, recipient: str, subject: str, body: str) -> None:
        message = MIMEText(body, "plain")
        message["Subject"] = subject
        message["From"] = self.from_address
        message["To"] = recipient

        await asyncio.to_thread(self._send_blocking, message, recipient)
        logger.info(f"Email sent to {recipient}: {subject}")

    def _send_blocking(self, message: MIMEText, recipient: str) -> None:
        server = smtplib.SMTP(self.host, self.port, timeout=self.timeout_seconds)
        try:
            if self.use_tls:
                server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(message, to_addrs=[recipient])
        finally:
            server.quit()
