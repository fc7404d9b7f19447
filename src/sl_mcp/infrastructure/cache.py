from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any


class TTLCache:
    """In-process TTL cache. Safe for a single asyncio event loop; no locking added.

    Each entry carries its own expiry, so one class serves both the response
    cache and the failure threshold cache.
    """

    def __init__(
        self,
        default_ttl: int = 1800,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._default_ttl = default_ttl
        self._clock = clock or time.monotonic
        self._store: dict[str, tuple[Any, float]] = {}
        # Value tuple: (data, expires_at)

    def get(self, key: str) -> Any | None:
        """Return cached value or None if missing or expired."""
        entry = self._store.get(key)
        if entry is None:
            return None
        data, expires_at = entry
        if self._clock() >= expires_at:
            del self._store[key]
            return None
        return data

    def put(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store value with given TTL (seconds). Uses default_ttl when ttl is None.

        Overwrites any existing entry and resets its expiry.
        Expired entries of every key are swept before the write.
        """
        self.evict_expired()
        effective_ttl = ttl if ttl is not None else self._default_ttl
        self._store[key] = (value, self._clock() + effective_ttl)

    def size(self) -> int:
        """Return the number of stored entries, including expired ones not yet evicted."""
        return len(self._store)

    def evict_expired(self) -> int:
        """Remove all expired entries from the store, returning how many were dropped."""
        now = self._clock()
        expired_keys = [k for k, (_, exp) in self._store.items() if now >= exp]
        for k in expired_keys:
            del self._store[k]
        return len(expired_keys)
