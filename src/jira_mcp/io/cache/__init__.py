"""TTL cache for slow-changing Jira catalogs."""

from .memory import DEFAULT_TTL, CacheEntry, CacheKeys, MemoryCache

__all__ = [
    "DEFAULT_TTL",
    "CacheEntry",
    "CacheKeys",
    "MemoryCache",
]
