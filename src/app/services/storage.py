from abc import ABC, abstractmethod


class StorageError(Exception):
    """Stored bytes could not be read or written"""


class IStorage(ABC):
    """Binary document storage - application layer"""

    @abstractmethod
    async def store(self, data: bytes, filename: str) -> str:
        """Persist bytes, returns an opaque locator"""
        pass

    @abstractmethod
    async def retrieve(self, locator: str) -> bytes:
        """
        Read bytes back.

        Raises:
            StorageError: locator unknown or unreadable
        """
        pass

    @abstractmethod
    async def delete(self, locator: str) -> None:
        """Remove bytes; deleting an unknown locator is a no-op"""
        pass
