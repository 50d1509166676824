"""HAL link objects."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

SELF = "self"


@dataclass(frozen=True)
class Link:
    """A HAL link. ``href`` may be a URI template when ``templated`` is set."""

    href: str
    templated: bool = False

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> Link:
        return cls(href=raw["href"], templated=bool(raw.get("templated", False)))


def parse_links(raw_links: Any) -> Mapping[str, Link]:
    """Build a read-only relation -> Link mapping from a raw ``_links`` object.

    A relation holding a list of links resolves to its first entry. Entries
    without an ``href`` are skipped.
    """
    links: dict[str, Link] = {}
    if not isinstance(raw_links, Mapping):
        return MappingProxyType(links)

    for relation, raw in raw_links.items():
        if isinstance(raw, list):
            raw = raw[0] if raw else None
        if isinstance(raw, Link):
            links[relation] = raw
        elif isinstance(raw, Mapping) and raw.get("href"):
            links[relation] = Link.from_raw(raw)
    return MappingProxyType(links)
