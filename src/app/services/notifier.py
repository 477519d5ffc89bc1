import logging
from abc import ABC, abstractmethod
from typing import Awaitable

logger = logging.getLogger(__name__)


class INotifier(ABC):
    """Outbound notification delivery - application layer"""

    @abstractmethod
    async def send_invitation(self, email: str, token: str, document_name: str) -> None:
        """Invite an unregistered email to a document"""
        pass

    @abstractmethod
    async def send_access_granted(self, email: str, document_name: str, role: str) -> None:
        """Tell a known identity it was given access"""
        pass

    @abstractmethod
    async def send_role_changed(self, email: str, document_name: str, role: str) -> None:
        """Tell a known identity its role changed"""
        pass

    @abstractmethod
    async def send_role_removed(self, email: str, document_name: str) -> None:
        """Tell a known identity its access was removed"""
        pass


async def deliver_safely(notification: Awaitable[None], description: str) -> bool:
    """
    Await a notification, logging and swallowing any failure.

    Notifications never affect the outcome of the operation that queued them.

    Returns:
        True if the notification was delivered
    """
    try:
        await notification
    except Exception as e:
        logger.warning(f"Notification failed ({description}): {e}")
        return False
    return True
