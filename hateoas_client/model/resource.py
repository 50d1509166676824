"""Typed HAL resources.

Resources keep their properties, a read-only relation map and a reference
to the executor that built them, so relations are followed explicitly:

    >>> product = await client.get_resource("products", 1)
    >>> category = await product.get_relation("category")
    >>> reviews = await product.get_related_page("reviews")
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from hateoas_client.errors import MissingLinkError, UnboundResourceError
from hateoas_client.model.link import SELF, Link, parse_links
from hateoas_client.model.options import GetOption
from hateoas_client.resolve.classifier import ResourceKind

if TYPE_CHECKING:
    from hateoas_client.http.executor import HttpExecutor

URI_LIST_HEADERS = {"Content-Type": "text/uri-list"}

# Attributes shared, not copied, by deep copies of resources and collections.
SHARED_ATTRIBUTES = frozenset({"_links", "_client"})


class BaseResource:
    """Common behaviour of resources and embedded resources.

    Properties are exposed both as attributes and as items; attribute writes
    that do not start with an underscore update the properties.
    """

    def __init__(
        self,
        properties: Mapping[str, Any] | None = None,
        links: Mapping[str, Any] | None = None,
        client: HttpExecutor | None = None,
    ) -> None:
        object.__setattr__(self, "_properties", dict(properties or {}))
        object.__setattr__(self, "_links", parse_links(links or {}))
        object.__setattr__(self, "_client", client)

    @property
    def links(self) -> Mapping[str, Link]:
        return self._links

    @property
    def properties(self) -> dict[str, Any]:
        return self._properties

    def __getattr__(self, name: str) -> Any:
        properties = self.__dict__.get("_properties")
        if properties is not None and name in properties:
            return properties[name]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_") or hasattr(type(self), name):
            object.__setattr__(self, name, value)
        else:
            self._properties[name] = value

    def __getitem__(self, name: str) -> Any:
        return self._properties[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self._properties[name] = value

    def __contains__(self, name: object) -> bool:
        return name in self._properties

    def __iter__(self) -> Iterator[str]:
        return iter(self._properties)

    def get(self, name: str, default: Any = None) -> Any:
        return self._properties.get(name, default)

    def __deepcopy__(self, memo: dict[int, Any]) -> BaseResource:
        clone = type(self).__new__(type(self))
        for name, value in self.__dict__.items():
            shared = name in SHARED_ATTRIBUTES
            object.__setattr__(clone, name, value if shared else copy.deepcopy(value, memo))
        return clone

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._properties!r})"

    def to_dict(self) -> dict[str, Any]:
        """Request body form: nested resources become their self link href."""
        return {name: to_request_body(value) for name, value in self._properties.items()}

    def has_relation(self, relation: str) -> bool:
        return relation in self._links

    def get_relation_link(self, relation: str) -> Link:
        """Return the link of ``relation``.

        Raises:
            MissingLinkError: If the resource has no such relation.
        """
        try:
            return self._links[relation]
        except KeyError:
            raise MissingLinkError(
                f"Resource relation with name '{relation}' not found",
                relation=relation,
            ) from None

    async def resolve(
        self,
        relation: str,
        expected: ResourceKind,
        options: GetOption | None = None,
    ) -> Any:
        """Fetch ``relation`` expecting the given ResourceKind.

        Raises:
            MissingLinkError: If the relation is absent.
            WrongResourceKindError: If the response has another shape.
        """
        return await self._bound_client().get_relation(self, relation, expected, options)

    async def get_relation(self, relation: str, options: GetOption | None = None) -> Any:
        return await self.resolve(relation, ResourceKind.RESOURCE, options)

    async def get_related_collection(self, relation: str, options: GetOption | None = None) -> Any:
        return await self.resolve(relation, ResourceKind.RESOURCE_COLLECTION, options)

    async def get_related_page(self, relation: str, options: GetOption | None = None) -> Any:
        return await self.resolve(relation, ResourceKind.PAGED_RESOURCE_COLLECTION, options)

    def _bound_client(self) -> HttpExecutor:
        if self._client is None:
            raise UnboundResourceError()
        return self._client


class Resource(BaseResource):
    """A resource with its own ``self`` link; equality follows ``self.href``."""

    @property
    def self_link(self) -> Link:
        return self.get_relation_link(SELF)

    @property
    def self_href(self) -> str:
        return self.self_link.href

    @property
    def resource_id(self) -> str:
        """Last path segment of the self link."""
        href = self.self_href.split("{", 1)[0].split("?", 1)[0].rstrip("/")
        return href.rsplit("/", 1)[-1]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Resource):
            return NotImplemented
        if SELF not in self._links or SELF not in other.links:
            return self is other
        return _bare(self.self_href) == _bare(other.self_href)

    def __hash__(self) -> int:
        if SELF not in self._links:
            return id(self)
        return hash(_bare(self.self_href))

    async def bind_relation(self, relation: str, *entities: Resource) -> Any:
        """Replace ``relation`` with the given resources (PUT ``text/uri-list``)."""
        return await self._send_uri_list("PUT", relation, entities)

    async def add_collection_relation(self, relation: str, entities: Iterable[Resource]) -> Any:
        """Append resources to a collection ``relation`` (POST ``text/uri-list``)."""
        return await self._send_uri_list("POST", relation, list(entities))

    async def unbind_relation(self, relation: str) -> Any:
        """Remove every association of ``relation`` (DELETE)."""
        client = self._bound_client()
        url = _bare(self.get_relation_link(relation).href)
        return await client.send("DELETE", url, resource_name=client.resource_name_of(self.self_href))

    async def delete_relation(self, relation: str, entity: Resource) -> Any:
        """Remove one resource from a collection ``relation`` (DELETE ``<relation>/<id>``)."""
        client = self._bound_client()
        url = f"{_bare(self.get_relation_link(relation).href)}/{entity.resource_id}"
        return await client.send("DELETE", url, resource_name=client.resource_name_of(self.self_href))

    async def _send_uri_list(self, method: str, relation: str, entities: Iterable[Resource]) -> Any:
        client = self._bound_client()
        url = _bare(self.get_relation_link(relation).href)
        body = "\n".join(_bare(entity.self_href) for entity in entities)
        return await client.send(
            method,
            url,
            body=body,
            headers=dict(URI_LIST_HEADERS),
            resource_name=client.resource_name_of(self.self_href),
        )


class EmbeddedResource(BaseResource):
    """A resource inlined in a parent without a ``self`` link of its own."""


def _bare(href: str) -> str:
    return href.split("{", 1)[0]


def to_request_body(value: Any) -> Any:
    if isinstance(value, Resource) and SELF in value.links:
        return _bare(value.self_href)
    if isinstance(value, BaseResource):
        return value.to_dict()
    resources = getattr(value, "resources", None)
    if isinstance(resources, list):
        return [to_request_body(item) for item in resources]
    if isinstance(value, Mapping):
        return {key: to_request_body(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_request_body(item) for item in value]
    return value
