"""Typed HAL model: links, request options, resources and collections."""

from hateoas_client.model.collection import PageData, PagedResourceCollection, ResourceCollection
from hateoas_client.model.link import Link, parse_links
from hateoas_client.model.options import GetOption, PageParam, RequestOption, SortOrder
from hateoas_client.model.resource import BaseResource, EmbeddedResource, Resource

__all__ = [
    "Link",
    "parse_links",
    "GetOption",
    "PageParam",
    "RequestOption",
    "SortOrder",
    "BaseResource",
    "Resource",
    "EmbeddedResource",
    "ResourceCollection",
    "PagedResourceCollection",
    "PageData",
]
