"""Response cache keyed by normalized request signature."""

from __future__ import annotations

import copy
import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

import httpx

from hateoas_client.adapters.cache import InMemoryCacheAdapter
from hateoas_client.ports.cache import CachePort, CacheStats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheKey:
    """Normalized (url, query params) signature of a GET request.

    Params are ordered by name with a stable sort, so ``{a, b}`` and
    ``{b, a}`` give the same key while repeated keys such as ``sort`` keep
    their relative order.
    """

    url: str
    params: tuple[tuple[str, str], ...] = ()

    @classmethod
    def of(
        cls,
        url: str,
        params: httpx.QueryParams | Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None,
    ) -> CacheKey:
        """Build the key of ``url`` plus ``params``.

        A query string already inlined in ``url`` is merged with ``params``,
        so a filled template or a navigation link shares its entry with the
        same request sent with separate params.
        """
        bare_url, _, query = url.partition("?")
        items = list(httpx.QueryParams(query).multi_items())
        if isinstance(params, httpx.QueryParams):
            items += params.multi_items()
        elif isinstance(params, Mapping):
            items += [(str(k), str(v)) for k, v in params.items()]
        elif params is not None:
            items += [(str(k), str(v)) for k, v in params]
        return cls(url=bare_url.rstrip("/"), params=tuple(sorted(items, key=lambda item: item[0])))

    def __str__(self) -> str:
        if not self.params:
            return self.url
        return f"{self.url}?{urlencode(self.params, safe=',')}"


class ResourceCache:
    """Snapshot cache of built resources on top of a CachePort.

    Values are deep-copied on the way in and out, so callers mutating a
    returned resource never alter the cached entry.

    Attributes:
        enabled: When False every lookup misses and nothing is stored.
        lifetime: Entry time to live in seconds, 0 for no expiry.
        base_url: API root that resource eviction is anchored to.
    """

    def __init__(
        self,
        adapter: CachePort | None = None,
        enabled: bool = True,
        lifetime: int = 300,
        base_url: str | None = None,
    ) -> None:
        self.adapter = adapter or InMemoryCacheAdapter()
        self.enabled = enabled
        self.lifetime = lifetime
        self.base_url = base_url

    def has_resource(self, key: CacheKey) -> bool:
        return self.enabled and self.adapter.exists(str(key))

    def get_resource(self, key: CacheKey) -> Any | None:
        if not self.enabled:
            return None
        value = self.adapter.get(str(key))
        if value is None:
            logger.debug("Cache miss", extra={"cache_key": str(key)})
            return None
        logger.debug("Cache hit", extra={"cache_key": str(key)})
        return copy.deepcopy(value)

    def put_resource(self, key: CacheKey, value: Any) -> None:
        if not self.enabled:
            return
        self.adapter.set(str(key), copy.deepcopy(value), ttl=self.lifetime or None)
        logger.debug("Cached", extra={"cache_key": str(key)})

    def evict(self, pattern: str | re.Pattern[str]) -> int:
        """Remove every entry whose key matches ``pattern``."""
        count = self.adapter.evict(pattern)
        if count:
            logger.debug(f"Evicted {count} cache entries matching {pattern!r}")
        return count

    def evict_resource(self, resource_name: str | None) -> int:
        """Remove every entry of ``resource_name``.

        With a ``base_url`` only URLs directly under it match, otherwise any
        URL holding ``resource_name`` as a path segment.
        """
        if not resource_name:
            return 0
        prefix = f"^{re.escape(self.base_url.rstrip('/'))}" if self.base_url else ""
        return self.evict(re.compile(rf"{prefix}/{re.escape(resource_name)}(?:[/?]|$)"))

    def clear(self) -> None:
        self.adapter.clear()

    def get_stats(self) -> CacheStats:
        return self.adapter.get_stats()
