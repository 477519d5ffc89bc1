import pytest

from src.adapter.services.memory_cache_store import MemoryCacheStore
from src.app.services.cache_store import CacheError


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.mark.asyncio
async def test_entry_expires_after_ttl():
    clock = FakeClock()
    store = MemoryCacheStore(clock=clock)

    await store.set("k", {"a": 1}, ttl=10)
    assert await store.get("k") == {"a": 1}

    clock.now += 10
    assert await store.get("k") is None
    assert len(store) == 0


@pytest.mark.asyncio
async def test_values_are_copies():
    store = MemoryCacheStore()
    value = {"items": [1, 2]}

    await store.set("k", value, ttl=60)
    value["items"].append(3)

    assert await store.get("k") == {"items": [1, 2]}


@pytest.mark.asyncio
async def test_delete_reports_existence():
    store = MemoryCacheStore(key_prefix="p")
    await store.set("k", 1, ttl=60)

    assert await store.delete("k") is True
    assert await store.delete("k") is False


@pytest.mark.asyncio
async def test_rejects_unserialisable_value_and_bad_ttl():
    store = MemoryCacheStore()

    with pytest.raises(CacheError):
        await store.set("k", object(), ttl=60)
    with pytest.raises(CacheError):
        await store.set("k", 1, ttl=0)


@pytest.mark.asyncio
async def test_writes_evict_expired_entries():
    clock = FakeClock()
    store = MemoryCacheStore(clock=clock)
    await store.set("old:1", 1, ttl=5)
    await store.set("old:2", 2, ttl=5)
    await store.set("live", 3, ttl=60)

    clock.now += 5
    await store.set("new", 4, ttl=60)

    # Expired keys never read again are still reclaimed
    assert len(store) == 2
    assert await store.get("live") == 3
