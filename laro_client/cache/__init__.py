"""Response cache."""

from laro_client.cache.store import CacheEntry, CacheStore, InMemoryCacheStore, ResponseCache

__all__ = ["CacheEntry", "CacheStore", "InMemoryCacheStore", "ResponseCache"]
