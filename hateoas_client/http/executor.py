"""Request pipeline shared by every HTTP service.

GET: cache check -> transport -> classify -> build -> cache store.
Mutations: transport -> evict the affected resource name.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from hateoas_client.cache import CacheKey, ResourceCache
from hateoas_client.config.settings import HalConfiguration
from hateoas_client.errors import InvalidArgumentError, MissingLinkError
from hateoas_client.model.link import Link
from hateoas_client.model.options import GetOption, PageParam
from hateoas_client.ports.transport import TransportPort
from hateoas_client.resolve.classifier import ResourceKind
from hateoas_client.resolve.factory import ResourceFactory
from hateoas_client.util.url import (
    PAGE_PARAMS,
    convert_to_params,
    fill_template_params,
    remove_template_params,
    resource_name_from_url,
)

if TYPE_CHECKING:
    from hateoas_client.model.collection import PagedResourceCollection
    from hateoas_client.model.resource import BaseResource

logger = logging.getLogger(__name__)

MUTATING_METHODS = ("POST", "PUT", "PATCH", "DELETE")


class HttpExecutor:
    """Runs requests through the transport, factory and cache.

    Built resources keep a reference to the executor and call back into it
    to follow relations and navigate pages.

    Concurrent misses for the same key are not merged: each one reaches the
    transport and the last to finish overwrites the cache entry.
    """

    def __init__(
        self,
        transport: TransportPort,
        cache: ResourceCache,
        factory: ResourceFactory,
        config: HalConfiguration,
    ) -> None:
        self.transport = transport
        self.cache = cache
        self.factory = factory
        self.config = config

    @property
    def base_url(self) -> str:
        return self.config.base_api_url

    def resource_name_of(self, url: str) -> str | None:
        return resource_name_from_url(url, self.base_url)

    async def get(
        self,
        url: str,
        expected: ResourceKind,
        params: httpx.QueryParams | None = None,
    ) -> Any:
        """GET ``url`` and build the response as ``expected``, using the cache.

        Raises:
            WrongResourceKindError: If the response has another shape.
            TransportError: Propagated from the transport.
        """
        key = CacheKey.of(url, params)
        cached = self.cache.get_resource(key)
        if cached is not None:
            return cached

        logger.debug("Fetching", extra={"method": "GET", "cache_key": str(key)})
        raw = await self.transport.get(url, params=params or None)
        result = self.factory.build(raw, expected, client=self)
        self.cache.put_resource(key, result)
        return result

    async def get_any(self, url: str, params: httpx.QueryParams | None = None) -> Any:
        """GET ``url`` and build whatever shape comes back, using the cache.

        Unclassifiable bodies are returned (and cached) as raw JSON.
        """
        key = CacheKey.of(url, params)
        cached = self.cache.get_resource(key)
        if cached is not None:
            return cached

        logger.debug("Fetching", extra={"method": "GET", "cache_key": str(key)})
        raw = await self.transport.get(url, params=params or None)
        result = self.factory.build_any(raw, client=self)
        self.cache.put_resource(key, result)
        return result

    async def get_relation(
        self,
        resource: BaseResource,
        relation: str,
        expected: ResourceKind,
        options: GetOption | None = None,
    ) -> Any:
        """Follow ``relation`` of ``resource``.

        Templated links are filled from ``options``; otherwise the options
        are sent as query params. Paged relations get the default page when
        ``options`` has none.
        """
        link = resource.get_relation_link(relation)
        if expected is ResourceKind.PAGED_RESOURCE_COLLECTION:
            options = (options or GetOption()).with_default_page(self.config.default_page_size)
        return await self.fetch_link(link, expected, options)

    async def fetch_link(self, link: Link, expected: ResourceKind, options: GetOption | None = None) -> Any:
        if link.templated:
            return await self.get(fill_template_params(link.href, options), expected)
        return await self.get(link.href, expected, convert_to_params(options))

    async def navigate(self, link: Link) -> PagedResourceCollection[Any]:
        """Fetch a page navigation link (first/prev/next/last) as is."""
        return await self.fetch_link(link, ResourceKind.PAGED_RESOURCE_COLLECTION)

    async def get_page_of(
        self,
        collection: PagedResourceCollection[Any],
        page_param: PageParam,
    ) -> PagedResourceCollection[Any]:
        """Fetch another page of ``collection`` from its self link.

        Existing page/size/sort params on the self link are replaced, any
        other query params (filters, projection) are kept.
        """
        self_link = collection.links.get("self")
        if self_link is None:
            raise MissingLinkError("There is no 'self' page link", relation="self")

        href = remove_template_params(self_link.href)
        kept = [
            (name, value)
            for name, value in httpx.URL(href).params.multi_items()
            if name not in PAGE_PARAMS
        ]
        page_params = convert_to_params(GetOption(page_param=page_param))
        params = httpx.QueryParams([*page_params.multi_items(), *kept])
        bare_url = href.split("?", 1)[0]
        return await self.get(bare_url, ResourceKind.PAGED_RESOURCE_COLLECTION, params)

    async def send(
        self,
        method: str,
        url: str,
        body: Any = None,
        params: httpx.QueryParams | None = None,
        headers: dict[str, str] | None = None,
        resource_name: str | None = None,
    ) -> Any:
        """Send a mutating request and evict the affected resource name.

        The cache is only evicted when the transport call succeeds.
        """
        method = method.upper()
        if method not in MUTATING_METHODS:
            raise InvalidArgumentError(f"Unsupported mutating method: {method}", method=method)

        logger.debug("Sending", extra={"method": method, "url": url})
        if method == "DELETE":
            raw = await self.transport.delete(url, params=params or None, headers=headers)
        else:
            sender = getattr(self.transport, method.lower())
            raw = await sender(url, body=body, params=params or None, headers=headers)

        self.cache.evict_resource(resource_name or self.resource_name_of(url))
        return raw
