"""Construction of typed resource objects from classified HAL JSON."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from hateoas_client.errors import WrongResourceKindError
from hateoas_client.model.collection import PageData, PagedResourceCollection, ResourceCollection
from hateoas_client.model.resource import EmbeddedResource, Resource
from hateoas_client.resolve.classifier import EMBEDDED, LINKS, PAGE, ResourceKind, classify

if TYPE_CHECKING:
    from hateoas_client.http.executor import HttpExecutor

logger = logging.getLogger(__name__)

RESERVED_KEYS = frozenset({LINKS, EMBEDDED})

WRONG_KIND_MESSAGES = {
    ResourceKind.RESOURCE: "You try to get wrong resource type, expected resource type.",
    ResourceKind.RESOURCE_COLLECTION: "You try to get wrong resource type, expected resource collection type.",
    ResourceKind.PAGED_RESOURCE_COLLECTION: (
        "You try to get wrong resource type, expected paged resource collection type."
    ),
    ResourceKind.EMBEDDED_RESOURCE: "You try to get wrong resource type, expected embedded resource type.",
}


class ResourceFactory:
    """Builds typed objects for each ResourceKind.

    The concrete types are chosen once, when the factory is created. Each
    one is called with keyword arguments: resources receive ``properties``,
    ``links`` and ``client``; collections ``resources``, ``links`` and
    ``client``; paged collections additionally ``page_data``. Subclasses of
    the package types satisfy this, as does any callable with the same
    signature.

    Example:
        >>> class Product(Resource):
        ...     @property
        ...     def label(self):
        ...         return f"{self.name} ({self.price})"
        >>> factory = ResourceFactory(resource_type=Product)
    """

    def __init__(
        self,
        resource_type: Callable[..., Any] = Resource,
        embedded_resource_type: Callable[..., Any] = EmbeddedResource,
        collection_type: Callable[..., Any] = ResourceCollection,
        paged_collection_type: Callable[..., Any] = PagedResourceCollection,
    ) -> None:
        self.resource_type = resource_type
        self.embedded_resource_type = embedded_resource_type
        self.collection_type = collection_type
        self.paged_collection_type = paged_collection_type

    def build(self, raw: Any, expected: ResourceKind, client: HttpExecutor | None = None) -> Any:
        """Build ``raw`` as ``expected``.

        Raises:
            WrongResourceKindError: If ``raw`` classifies to another kind.
        """
        actual = classify(raw, nested=expected is ResourceKind.EMBEDDED_RESOURCE)
        if actual is not expected:
            logger.debug(f"Expected {expected.value}, response classified as {actual.value}")
            raise WrongResourceKindError(
                WRONG_KIND_MESSAGES.get(expected, "You try to get wrong resource type."),
                expected=expected,
                actual=actual,
            )
        return self._build_kind(raw, actual, client)

    def build_any(self, raw: Any, client: HttpExecutor | None = None) -> Any:
        """Build whatever ``raw`` classifies as; UNKNOWN payloads are returned as is."""
        return self._build_kind(raw, classify(raw), client)

    def build_resource(self, raw: Mapping[str, Any], client: HttpExecutor | None = None) -> Any:
        return self.resource_type(
            properties=self._properties(raw, client),
            links=raw.get(LINKS),
            client=client,
        )

    def build_embedded_resource(self, raw: Mapping[str, Any], client: HttpExecutor | None = None) -> Any:
        return self.embedded_resource_type(
            properties=self._properties(raw, client),
            links=raw.get(LINKS),
            client=client,
        )

    def build_resource_collection(self, raw: Mapping[str, Any], client: HttpExecutor | None = None) -> Any:
        return self.collection_type(
            resources=self._collection_items(raw, client),
            links=raw.get(LINKS),
            client=client,
        )

    def build_paged_resource_collection(
        self, raw: Mapping[str, Any], client: HttpExecutor | None = None
    ) -> Any:
        return self.paged_collection_type(
            resources=self._collection_items(raw, client),
            links=raw.get(LINKS),
            client=client,
            page_data=PageData.from_raw(raw.get(PAGE)),
        )

    def _build_kind(self, raw: Any, kind: ResourceKind, client: HttpExecutor | None) -> Any:
        if kind is ResourceKind.PAGED_RESOURCE_COLLECTION:
            return self.build_paged_resource_collection(raw, client)
        elif kind is ResourceKind.RESOURCE_COLLECTION:
            return self.build_resource_collection(raw, client)
        elif kind is ResourceKind.RESOURCE:
            return self.build_resource(raw, client)
        elif kind is ResourceKind.EMBEDDED_RESOURCE:
            return self.build_embedded_resource(raw, client)
        else:
            return raw

    def _properties(self, raw: Mapping[str, Any], client: HttpExecutor | None) -> dict[str, Any]:
        properties = {key: value for key, value in raw.items() if key not in RESERVED_KEYS}
        embedded = raw.get(EMBEDDED)
        if isinstance(embedded, Mapping):
            for relation, value in embedded.items():
                properties[relation] = self._build_nested(value, client)
        return properties

    def _build_nested(self, value: Any, client: HttpExecutor | None) -> Any:
        if isinstance(value, list):
            return [self._build_nested(item, client) for item in value]
        kind = classify(value, nested=True)
        if kind is ResourceKind.UNKNOWN:
            return value
        return self._build_kind(value, kind, client)

    def _collection_items(self, raw: Mapping[str, Any], client: HttpExecutor | None) -> list[Any]:
        items: list[Any] = []
        embedded = raw.get(EMBEDDED)
        if not isinstance(embedded, Mapping):
            return items
        for value in embedded.values():
            values = value if isinstance(value, list) else [value]
            items.extend(self._build_nested(item, client) for item in values)
        return items
