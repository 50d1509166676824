"""Public client: wires configuration, transport, cache, factory and services.

Example:
    >>> from hateoas_client import GetOption, HateoasClient, PageParam
    >>> async def main():
    ...     async with HateoasClient.from_config("hateoas.yaml") as client:
    ...         page = await client.get_page(
    ...             "products",
    ...             options=GetOption(page_param=PageParam(size=50, sort={"name": "ASC"})),
    ...         )
    ...         for product in page:
    ...             category = await product.get_relation("category")
    ...         if page.has_next():
    ...             page = await page.next()
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from hateoas_client.adapters.transport import HttpxTransport
from hateoas_client.cache import ResourceCache
from hateoas_client.config.settings import HalConfiguration, load_config
from hateoas_client.errors import InvalidArgumentError
from hateoas_client.http.collection_service import ResourceCollectionHttpService
from hateoas_client.http.executor import MUTATING_METHODS, HttpExecutor
from hateoas_client.http.paged_service import PagedResourceCollectionHttpService
from hateoas_client.http.resource_service import ResourceHttpService, prepare_body
from hateoas_client.model.collection import PagedResourceCollection, ResourceCollection
from hateoas_client.model.options import GetOption, RequestOption
from hateoas_client.model.resource import BaseResource, Resource
from hateoas_client.observability.logging import configure_logging
from hateoas_client.ports.cache import CachePort, CacheStats
from hateoas_client.ports.transport import TransportPort
from hateoas_client.resolve.factory import ResourceFactory
from hateoas_client.util.url import convert_to_params, generate_resource_url
from hateoas_client.util.validation import validate_input_params

logger = logging.getLogger(__name__)


class HateoasClient:
    """Entry point for reading and writing a HAL API.

    Every collaborator can be injected; defaults are an
    :class:`HttpxTransport` configured from ``config``, an in-memory cache
    and a :class:`ResourceFactory` building the package's own types.

    Attributes:
        config: Client configuration.
        transport: Transport collaborator.
        cache: Response cache.
        factory: Resource factory.
        resources: Single resource service.
        collections: Collection service.
        pages: Paged collection service.
    """

    def __init__(
        self,
        config: HalConfiguration | None = None,
        transport: TransportPort | None = None,
        cache_adapter: CachePort | None = None,
        factory: ResourceFactory | None = None,
    ) -> None:
        self.config = config or HalConfiguration()
        if self.config.verbose_logs:
            configure_logging(level=logging.DEBUG)

        self.transport = transport or HttpxTransport(
            timeout=self.config.timeout,
            retry_count=self.config.retry_count,
            retry_delay=self.config.retry_delay,
            default_headers=self.config.default_headers,
        )
        self.cache = ResourceCache(
            adapter=cache_adapter,
            enabled=self.config.cache_enabled,
            lifetime=self.config.cache_lifetime,
            base_url=self.config.base_api_url,
        )
        self.factory = factory or ResourceFactory()
        self.executor = HttpExecutor(self.transport, self.cache, self.factory, self.config)

        self.resources = ResourceHttpService(self.executor)
        self.collections = ResourceCollectionHttpService(self.executor)
        self.pages = PagedResourceCollectionHttpService(self.executor)
        logger.debug(f"HAL client ready for {self.config.base_api_url}")

    @classmethod
    def from_config(cls, config_path: str | Path | None = None, **overrides: Any) -> HateoasClient:
        """Create a client from a YAML file, environment and keyword overrides."""
        return cls(config=load_config(config_path, **overrides))

    async def connect(self) -> None:
        await self.transport.connect()

    async def close(self) -> None:
        await self.transport.close()

    async def __aenter__(self) -> HateoasClient:
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def get_resource(self, resource_name: str, resource_id: Any, options: GetOption | None = None) -> Resource:
        return await self.resources.get_resource(resource_name, resource_id, options)

    async def get_collection(
        self, resource_name: str, query: str | None = None, options: GetOption | None = None
    ) -> ResourceCollection[Any]:
        return await self.collections.get_resource_collection(resource_name, query, options)

    async def get_page(
        self, resource_name: str, query: str | None = None, options: GetOption | None = None
    ) -> PagedResourceCollection[Any]:
        return await self.pages.get_resource_page(resource_name, query, options)

    async def search_resource(
        self, resource_name: str, search_query: str, options: GetOption | None = None
    ) -> Resource:
        return await self.resources.search(resource_name, search_query, options)

    async def search_collection(
        self, resource_name: str, search_query: str, options: GetOption | None = None
    ) -> ResourceCollection[Any]:
        return await self.collections.search(resource_name, search_query, options)

    async def search_page(
        self, resource_name: str, search_query: str, options: GetOption | None = None
    ) -> PagedResourceCollection[Any]:
        return await self.pages.search(resource_name, search_query, options)

    async def create_resource(
        self,
        resource_name: str,
        body: BaseResource | Mapping[str, Any],
        options: RequestOption | None = None,
    ) -> Any:
        return await self.resources.create_resource(resource_name, body, options)

    async def update_resource(self, entity: Resource, body: Mapping[str, Any] | None = None) -> Any:
        return await self.resources.update_resource(entity, body)

    async def update_resource_by_id(
        self, resource_name: str, resource_id: Any, body: BaseResource | Mapping[str, Any]
    ) -> Any:
        return await self.resources.update_resource_by_id(resource_name, resource_id, body)

    async def patch_resource(self, entity: Resource, body: Mapping[str, Any] | None = None) -> Any:
        return await self.resources.patch_resource(entity, body)

    async def patch_resource_by_id(
        self, resource_name: str, resource_id: Any, body: BaseResource | Mapping[str, Any]
    ) -> Any:
        return await self.resources.patch_resource_by_id(resource_name, resource_id, body)

    async def delete_resource(self, entity: Resource) -> Any:
        return await self.resources.delete_resource(entity)

    async def delete_resource_by_id(self, resource_name: str, resource_id: Any) -> Any:
        return await self.resources.delete_resource_by_id(resource_name, resource_id)

    async def custom_query(
        self,
        resource_name: str,
        method: str,
        query: str,
        body: Any = None,
        options: GetOption | RequestOption | None = None,
    ) -> Any:
        """Send an arbitrary request to ``<base>/<resource_name>/<query>``.

        GET results are cached and built as whatever shape they have (raw
        JSON when unclassifiable); other methods evict ``resource_name``.
        """
        validate_input_params({"resourceName": resource_name, "method": method, "query": query})
        url = generate_resource_url(self.config.base_api_url, resource_name, query)
        params = convert_to_params(options)
        method = method.upper()

        if method == "GET":
            return await self.executor.get_any(url, params)
        if method not in MUTATING_METHODS:
            raise InvalidArgumentError(f"Unsupported method: {method}", method=method)
        raw = await self.executor.send(
            method, url, body=prepare_body(body), params=params, resource_name=resource_name
        )
        return self.factory.build_any(raw, client=self.executor)

    def evict_cache(self, resource_name: str | None = None) -> None:
        """Drop cached entries of ``resource_name``, or everything when omitted."""
        if resource_name is None:
            self.cache.clear()
        else:
            self.cache.evict_resource(resource_name)

    def cache_stats(self) -> CacheStats:
        return self.cache.get_stats()
