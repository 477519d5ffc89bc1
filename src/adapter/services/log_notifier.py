import logging

from src.app.services.notifier import INotifier

logger = logging.getLogger(__name__)


class LogNotifier(INotifier):
    """Notifier that only writes to the log. Default for development and tests."""

    async def send_invitation(self, email: str, token: str, document_name: str) -> None:
        logger.info(f"[notify] invitation to {email} for '{document_name}' (token {token[:6]}...)")

    async def send_access_granted(self, email: str, document_name: str, role: str) -> None:
        logger.info(f"[notify] {email} granted {role} access to '{document_name}'")

    async def send_role_changed(self, email: str, document_name: str, role: str) -> None:
        logger.info(f"[notify] {email} role on '{document_name}' changed to {role}")

    async def send_role_removed(self, email: str, document_name: str) -> None:
        logger.info(f"[notify] {email} access to '{document_name}' removed")
