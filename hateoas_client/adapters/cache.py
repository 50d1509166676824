"""In-memory cache adapter.

Default storage behind :class:`hateoas_client.cache.ResourceCache`. Keys are
the string form of a ``CacheKey``, so ``evict`` patterns match on URLs.
"""

from __future__ import annotations

import re
import time
from typing import Any, NamedTuple

from hateoas_client.ports.cache import CachePort, CacheStats


class _Entry(NamedTuple):
    value: Any
    expires_at: float | None

    def expired(self, now: float) -> bool:
        return self.expires_at is not None and now > self.expires_at


class InMemoryCacheAdapter(CachePort):
    """Dictionary backed cache with optional per-entry expiry.

    Expired entries are dropped lazily, when they are next looked at.

    Attributes:
        default_ttl: Lifetime in seconds for entries set without ``ttl``;
            None or 0 keeps them until evicted.
    """

    def __init__(self, default_ttl: int | None = None) -> None:
        self.default_ttl = default_ttl
        self._entries: dict[str, _Entry] = {}
        self._hits = self._misses = self._evictions = 0

    def _live(self, key: str) -> _Entry | None:
        entry = self._entries.get(key)
        if entry is not None and entry.expired(time.monotonic()):
            del self._entries[key]
            return None
        return entry

    def get(self, key: str) -> Any | None:
        entry = self._live(key)
        if entry is None:
            self._misses += 1
            return None
        self._hits += 1
        return entry.value

    def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        lifetime = self.default_ttl if ttl is None else ttl
        self._entries[key] = _Entry(value, time.monotonic() + lifetime if lifetime else None)
        return True

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def exists(self, key: str) -> bool:
        return self._live(key) is not None

    def keys(self) -> list[str]:
        return [key for key in list(self._entries) if self._live(key) is not None]

    def evict(self, pattern: str | re.Pattern[str]) -> int:
        regex = re.compile(pattern)
        doomed = [key for key in self._entries if regex.search(key)]
        for key in doomed:
            del self._entries[key]
        self._evictions += len(doomed)
        return len(doomed)

    def clear(self) -> bool:
        self._entries.clear()
        self._hits = self._misses = self._evictions = 0
        return True

    def get_stats(self) -> CacheStats:
        lookups = self._hits + self._misses
        return CacheStats(
            hits=self._hits,
            misses=self._misses,
            hit_rate=self._hits / lookups * 100 if lookups else 0.0,
            size=len(self._entries),
            evictions=self._evictions,
        )
