"""Classification of raw HAL JSON into resource shapes."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

LINKS = "_links"
EMBEDDED = "_embedded"
PAGE = "page"
SELF = "self"


class ResourceKind(str, Enum):
    """Shape of a HAL payload."""

    RESOURCE = "resource"
    EMBEDDED_RESOURCE = "embedded resource"
    RESOURCE_COLLECTION = "resource collection"
    PAGED_RESOURCE_COLLECTION = "paged resource collection"
    UNKNOWN = "unknown"


def classify(raw: Any, nested: bool = False) -> ResourceKind:
    """Determine the ResourceKind of a raw HAL payload.

    Checks run in order: ``page`` + ``_embedded`` + ``_links`` is a paged
    collection, ``_embedded`` + ``_links`` a collection, ``_links.self`` a
    resource. Anything else is an embedded resource when ``nested`` (it sits
    under a parent's ``_embedded``) and UNKNOWN at the top level.
    """
    if not isinstance(raw, Mapping):
        return ResourceKind.UNKNOWN

    if PAGE in raw and EMBEDDED in raw and LINKS in raw:
        return ResourceKind.PAGED_RESOURCE_COLLECTION
    if EMBEDDED in raw and LINKS in raw:
        return ResourceKind.RESOURCE_COLLECTION

    links = raw.get(LINKS)
    if isinstance(links, Mapping) and SELF in links:
        return ResourceKind.RESOURCE

    return ResourceKind.EMBEDDED_RESOURCE if nested else ResourceKind.UNKNOWN
