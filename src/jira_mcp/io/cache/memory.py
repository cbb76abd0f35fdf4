"""In-memory response cache with TTL support.

Holds slow-changing Jira catalogs (fields, link types, issue types, create
metadata, projects) so repeated tool calls do not refetch them. Keys come
from the namespaced generators on CacheKeys.

The cache is shared by every tool invocation in the process and is not
locked: two concurrent misses on one key may both run the producer and both
write. Only use with_cache for idempotent reads.
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Final, TypeVar

from jira_mcp.runtime.observability import get_logger

DEFAULT_TTL: Final[float] = 300.0  # 5 minutes
T = TypeVar("T")

_MISSING: Final = object()

log = get_logger("jira.cache")


@dataclass(slots=True)
class CacheEntry:
    """A cached value with its absolute expiry on the cache's clock."""

    value: object
    expires_at: float

    def expired(self, now: float) -> bool:
        return now > self.expires_at


class MemoryCache:
    """Key -> value store with per-entry expiry.

    An entry is visible while ``clock() <= expires_at`` and evicted on the
    first read after that.

    Args:
        default_ttl: TTL in seconds used when set() is given none
        clock: Monotonic time source in seconds (injectable for tests)

    Example:
        >>> cache = MemoryCache(default_ttl=60)
        >>> cache.set(CacheKeys.fields(), [{"id": "summary"}])
        >>> cache.get(CacheKeys.fields())
        [{'id': 'summary'}]
        >>> fields = await cache.with_cache(CacheKeys.fields(), fetch_fields)
    """

    __slots__ = ("_store", "_default_ttl", "_clock")

    def __init__(
        self,
        default_ttl: float = DEFAULT_TTL,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._store: dict[str, CacheEntry] = {}
        self._default_ttl = default_ttl
        self._clock = clock

    @property
    def default_ttl(self) -> float:
        return self._default_ttl

    def _lookup(self, key: str) -> object:
        entry = self._store.get(key)
        if entry is None:
            log.debug("cache miss", key=key)
            return _MISSING
        if entry.expired(self._clock()):
            del self._store[key]
            log.debug("cache miss", key=key, expired=True)
            return _MISSING
        log.debug("cache hit", key=key)
        return entry.value

    def get(self, key: str, default: object = None) -> object:
        """Stored value, or ``default`` when absent or expired."""
        value = self._lookup(key)
        return default if value is _MISSING else value

    def set(self, key: str, value: object, ttl: float | None = None) -> None:
        """Store value for ``ttl`` seconds (default_ttl when None)."""
        lifetime = self._default_ttl if ttl is None else ttl
        self._store[key] = CacheEntry(value=value, expires_at=self._clock() + lifetime)

    def delete(self, key: str) -> bool:
        """Remove an entry. Returns whether one was present."""
        return self._store.pop(key, None) is not None

    def clear(self) -> None:
        self._store.clear()

    @property
    def size(self) -> int:
        return len(self._store)

    def stats(self) -> dict[str, object]:
        """Cache statistics for monitoring."""
        now = self._clock()
        expired = sum(1 for e in self._store.values() if e.expired(now))
        return {
            "total_entries": len(self._store),
            "expired_entries": expired,
            "active_entries": len(self._store) - expired,
            "default_ttl": self._default_ttl,
            "keys": list(self._store),
        }

    async def with_cache(
        self,
        key: str,
        producer: Callable[[], Awaitable[T]],
        ttl: float | None = None,
    ) -> T:
        """Return the cached value, or await producer() once and store its result.

        A hit is returned even when the stored value is falsy or None. When
        the producer raises, nothing is stored and the error propagates.
        """
        cached = self._lookup(key)
        if cached is not _MISSING:
            return cached  # type: ignore[return-value]
        value = await producer()
        self.set(key, value, ttl)
        return value


class CacheKeys:
    """Namespaced key generators for cached Jira catalogs."""

    PREFIX: Final[str] = "jira"

    @staticmethod
    def fields() -> str:
        return "jira:fields"

    @staticmethod
    def link_types() -> str:
        return "jira:linkTypes"

    @staticmethod
    def priorities() -> str:
        return "jira:priorities"

    @staticmethod
    def statuses() -> str:
        return "jira:statuses"

    @staticmethod
    def projects() -> str:
        return "jira:projects"

    @staticmethod
    def issue_types(project_key: str) -> str:
        return f"jira:issueTypes:{project_key}"

    @staticmethod
    def create_meta(project_key: str, issue_type: str | None = None) -> str:
        return f"jira:createMeta:{project_key}:{issue_type or 'all'}"
