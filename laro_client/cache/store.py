"""TTL cache for idempotent API calls.

Entries are created on a miss, read on a hit and overwritten wholesale on
refresh, never mutated in place. An entry is valid while
``now - timestamp < ttl``; an expired entry is never returned. Pydantic
models (API envelopes) are handed out as deep copies.

The cache performs no key derivation: callers must encode every parameter
that affects the result (filters, pagination) in the key.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Protocol, TypeVar

from pydantic import BaseModel

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _detached(value: T) -> T:
    """Copy pydantic models so callers never share the cached instance."""
    if isinstance(value, BaseModel):
        return value.model_copy(deep=True)
    return value


@dataclass(frozen=True)
class CacheEntry:
    """One cached value with its creation time and time-to-live (seconds)."""

    data: Any
    timestamp: float
    ttl: float

    def is_valid(self, now: float) -> bool:
        return now - self.timestamp < self.ttl


class CacheStore(Protocol):
    """Key → entry storage used by ResponseCache."""

    def get(self, key: str) -> CacheEntry | None: ...

    def set(self, key: str, entry: CacheEntry) -> None: ...

    def delete(self, key: str) -> None: ...

    def keys(self) -> Iterable[str]: ...

    def clear(self) -> None: ...


class InMemoryCacheStore:
    """Dict-backed cache store."""

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> CacheEntry | None:
        return self._entries.get(key)

    def set(self, key: str, entry: CacheEntry) -> None:
        self._entries[key] = entry

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._entries.keys())

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class ResponseCache:
    """Read-through cache in front of an async producer.

    Args:
        store: Entry storage (default: a fresh in-memory store).
        default_ttl: TTL in seconds used when a call gives none.
        clock: Monotonic clock (default ``time.monotonic``).
    """

    def __init__(
        self,
        store: CacheStore | None = None,
        default_ttl: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._store: CacheStore = store if store is not None else InMemoryCacheStore()
        self._default_ttl = default_ttl
        self._clock = clock
        self._hits = 0
        self._misses = 0

    @property
    def store(self) -> CacheStore:
        return self._store

    async def with_cache(
        self,
        key: str,
        producer: Callable[[], Awaitable[T]],
        ttl: float | None = None,
    ) -> T:
        """Return the cached value for ``key`` or produce and store a fresh one.

        A producer error propagates and leaves the store untouched.
        """
        ttl = self._default_ttl if ttl is None else ttl
        cached = self._store.get(key)
        now = self._clock()

        if cached is not None and cached.is_valid(now):
            self._hits += 1
            logger.debug("Cache hit for %s", key, extra={"cache_key": key})
            return _detached(cached.data)

        self._misses += 1
        logger.debug("Cache miss for %s", key, extra={"cache_key": key})

        data = await producer()
        self._store.set(key, CacheEntry(data=data, timestamp=now, ttl=ttl))
        return _detached(data)

    def clear(self, pattern: str | None = None) -> int:
        """Remove keys containing ``pattern``, or every key when no pattern is given.

        Returns:
            Number of entries removed.
        """
        if pattern is None:
            removed = len(list(self._store.keys()))
            self._store.clear()
        else:
            matching = [key for key in self._store.keys() if pattern in key]
            for key in matching:
                self._store.delete(key)
            removed = len(matching)

        logger.debug("Cleared %d cache entries (pattern=%r)", removed, pattern)
        return removed

    def stats(self) -> dict:
        """Hit/miss counters and current entry count."""
        return {
            "hits": self._hits,
            "misses": self._misses,
            "entries": len(list(self._store.keys())),
        }
