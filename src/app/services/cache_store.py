from abc import ABC, abstractmethod
from typing import Any, Optional


class CacheError(Exception):
    """Cache backend unavailable or failed an operation"""


class ICacheStore(ABC):
    """
    Generic TTL key/value store - application layer.

    Values must be JSON serialisable. Implementations raise CacheError on
    backend failures; callers decide whether to degrade.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Get a value, None on miss or expiry"""
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Store a value for ttl seconds"""
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete a key, returns True if it existed"""
        pass

    async def close(self) -> None:
        """Release backend connections"""
        return None
