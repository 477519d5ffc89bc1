"""In-process cache store for development, tests and single-instance runs."""

import json
import time
from typing import Any, Callable, Dict, Optional, Tuple

from src.app.services.cache_store import CacheError, ICacheStore


class MemoryCacheStore(ICacheStore):
    """
    Dictionary backed cache store.

    Values are kept JSON-encoded, like in Redis, so callers never share
    mutable objects with the cache.
    """

    def __init__(self, key_prefix: str = "", clock: Callable[[], float] = time.monotonic):
        self.key_prefix = key_prefix
        self._clock = clock
        self._entries: Dict[str, Tuple[float, str]] = {}

    def _make_cache_key(self, key: str) -> str:
        return f"{self.key_prefix}:{key}" if self.key_prefix else key

    async def get(self, key: str) -> Optional[Any]:
        cache_key = self._make_cache_key(key)
        entry = self._entries.get(cache_key)
        if entry is None:
            return None
        expires_at, data = entry
        if expires_at <= self._clock():
            del self._entries[cache_key]
            return None
        return json.loads(data)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        if ttl <= 0:
            raise CacheError(f"TTL must be positive, got {ttl}")
        try:
            data = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise CacheError(f"Value for {key} is not serialisable: {e}") from e
        now = self._clock()
        self._evict_expired(now)
        self._entries[self._make_cache_key(key)] = (now + ttl, data)

    def _evict_expired(self, now: float) -> None:
        expired = [k for k, (expires_at, _) in self._entries.items() if expires_at <= now]
        for cache_key in expired:
            del self._entries[cache_key]

    async def delete(self, key: str) -> bool:
        return self._entries.pop(self._make_cache_key(key), None) is not None

    def __len__(self) -> int:
        return len(self._entries)
