"""Storage port behind the resource cache."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass
class CacheStats:
    """Counters reported by ``HateoasClient.cache_stats()``; ``hit_rate`` is a percentage."""

    hits: int = 0
    misses: int = 0
    hit_rate: float = 0.0
    size: int = 0
    evictions: int = 0


class CachePort(ABC):
    """Key/value storage for built resources.

    Keys are the strings produced by :class:`hateoas_client.cache.CacheKey`,
    i.e. a URL followed by its sorted query. Entries past their TTL must
    behave as absent.
    """

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Stored value for ``key``, or None when absent or expired. Counts a hit or a miss."""
        ...

    @abstractmethod
    def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store ``value``; ``ttl`` in seconds overrides the adapter default."""
        ...

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove ``key``; False when nothing was stored under it."""
        ...

    @abstractmethod
    def exists(self, key: str) -> bool:
        ...

    @abstractmethod
    def keys(self) -> list[str]:
        ...

    @abstractmethod
    def evict(self, pattern: str | re.Pattern[str]) -> int:
        """Remove every key in which ``pattern`` is found by ``re.search``.

        Returns:
            Number of removed keys.
        """
        ...

    @abstractmethod
    def clear(self) -> bool:
        """Drop all entries and reset the counters."""
        ...

    @abstractmethod
    def get_stats(self) -> CacheStats:
        ...
