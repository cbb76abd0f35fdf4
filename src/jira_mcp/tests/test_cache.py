"""Tests for the TTL memory cache."""

import pytest

from jira_mcp.io.cache import CacheKeys, MemoryCache

from .support import FakeClock


@pytest.fixture
def cache(clock: FakeClock) -> MemoryCache:
    return MemoryCache(default_ttl=300, clock=clock)


def test_memory_cache_basic(cache: MemoryCache) -> None:
    assert cache.get("k") is None
    cache.set("k", {"a": 1})
    assert cache.get("k") == {"a": 1}
    assert cache.stats()["active_entries"] == 1
    assert cache.size == 1


def test_memory_cache_ttl(cache: MemoryCache, clock: FakeClock) -> None:
    cache.set("k", "v", 1)
    clock.advance(0.9)
    assert cache.get("k") == "v"
    clock.advance(0.3)
    assert cache.get("k") is None
    assert cache.size == 0  # evicted on read


def test_memory_cache_default_ttl(cache: MemoryCache, clock: FakeClock) -> None:
    cache.set("k", "v")
    clock.advance(300)
    assert cache.get("k") == "v"
    clock.advance(0.001)
    assert cache.get("k", "missing") == "missing"


def test_memory_cache_delete_and_clear(cache: MemoryCache) -> None:
    cache.set("a", 1)
    cache.set("b", 2)
    assert cache.delete("a") is True
    assert cache.delete("a") is False
    cache.clear()
    assert cache.size == 0


def test_memory_cache_stats(cache: MemoryCache, clock: FakeClock) -> None:
    cache.set("short", 1, 1)
    cache.set("long", 2)
    clock.advance(2)
    stats = cache.stats()
    assert stats["total_entries"] == 2
    assert stats["expired_entries"] == 1
    assert stats["active_entries"] == 1


@pytest.mark.asyncio
async def test_with_cache_repopulates_after_expiry(cache: MemoryCache, clock: FakeClock) -> None:
    calls = 0

    async def produce() -> str:
        nonlocal calls
        calls += 1
        return f"value-{calls}"

    cache.set("k", "v", 1)
    clock.advance(1.2)
    assert cache.get("k") is None
    assert await cache.with_cache("k", produce) == "value-1"
    assert await cache.with_cache("k", produce) == "value-1"
    assert calls == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("value", [None, 0, "", [], {}])
async def test_with_cache_hit_on_falsy_value(cache: MemoryCache, value: object) -> None:
    calls = 0

    async def produce() -> object:
        nonlocal calls
        calls += 1
        return value

    assert await cache.with_cache("k", produce) == value
    assert await cache.with_cache("k", produce) == value
    assert calls == 1


@pytest.mark.asyncio
async def test_with_cache_ttl_override(cache: MemoryCache, clock: FakeClock) -> None:
    async def produce() -> int:
        return 42

    await cache.with_cache("k", produce, ttl=5)
    clock.advance(6)
    assert cache.get("k", "missing") == "missing"


@pytest.mark.asyncio
async def test_with_cache_does_not_store_failures(cache: MemoryCache) -> None:
    async def fail() -> object:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        await cache.with_cache("k", fail)
    assert cache.get("k", "missing") == "missing"


def test_cache_keys() -> None:
    assert CacheKeys.fields() == "jira:fields"
    assert CacheKeys.link_types() == "jira:linkTypes"
    assert CacheKeys.projects() == "jira:projects"
    assert CacheKeys.issue_types("KP") == "jira:issueTypes:KP"
    assert CacheKeys.create_meta("KP") == "jira:createMeta:KP:all"
    assert CacheKeys.create_meta("KP", "Bug") == "jira:createMeta:KP:Bug"
