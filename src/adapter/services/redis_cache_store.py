"""Redis cache store."""

import json
import logging
from typing import Any, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from src.app.services.cache_store import CacheError, ICacheStore

logger = logging.getLogger(__name__)


class RedisCacheStore(ICacheStore):
    """Cache store backed by Redis SETEX/GET/DEL."""

    def __init__(self, redis_client: redis.Redis, key_prefix: str = ""):
        if redis_client is None:
            raise ValueError("Redis client is required")
        self.redis_client = redis_client
        self.key_prefix = key_prefix

    @classmethod
    def from_url(cls, url: str, key_prefix: str = "") -> "RedisCacheStore":
        client = redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_timeout=2,
            socket_connect_timeout=2,
        )
        return cls(client, key_prefix=key_prefix)

    def _make_cache_key(self, key: str) -> str:
        return f"{self.key_prefix}:{key}" if self.key_prefix else key

    async def get(self, key: str) -> Optional[Any]:
        cache_key = self._make_cache_key(key)
        try:
            data = await self.redis_client.get(cache_key)
        except RedisError as e:
            raise CacheError(f"GET {cache_key} failed: {e}") from e
        if data is None:
            return None
        try:
            return json.loads(data)
        except ValueError:
            logger.warning(f"Dropping undecodable cache entry: {cache_key}")
            await self.delete(key)
            return None

    async def set(self, key: str, value: Any, ttl: int) -> None:
        cache_key = self._make_cache_key(key)
        try:
            data = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise CacheError(f"Value for {cache_key} is not serialisable: {e}") from e
        try:
            await self.redis_client.setex(cache_key, ttl, data)
        except RedisError as e:
            raise CacheError(f"SETEX {cache_key} failed: {e}") from e

    async def delete(self, key: str) -> bool:
        cache_key = self._make_cache_key(key)
        try:
            return bool(await self.redis_client.delete(cache_key))
        except RedisError as e:
            raise CacheError(f"DEL {cache_key} failed: {e}") from e

    async def close(self) -> None:
        await self.redis_client.aclose()
