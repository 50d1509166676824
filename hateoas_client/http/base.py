"""Shared plumbing of the typed HTTP services."""

from __future__ import annotations

from typing import Any

from hateoas_client.http.executor import HttpExecutor
from hateoas_client.model.options import GetOption
from hateoas_client.resolve.classifier import ResourceKind
from hateoas_client.util.url import convert_to_params, generate_resource_url
from hateoas_client.util.validation import validate_input_params

SEARCH = "search"


class BaseHttpService:
    """Base for services that GET one ResourceKind by resource name."""

    kind: ResourceKind = ResourceKind.RESOURCE

    def __init__(self, executor: HttpExecutor) -> None:
        self.executor = executor

    def resource_url(self, resource_name: str, query: str | None = None) -> str:
        return generate_resource_url(self.executor.base_url, resource_name, query)

    async def get_http(self, url: str, options: GetOption | None = None) -> Any:
        """GET ``url`` expecting this service's ResourceKind."""
        return await self.executor.get(url, self.kind, convert_to_params(options))

    async def search(self, resource_name: str, search_query: str, options: GetOption | None = None) -> Any:
        """GET ``<base>/<resource_name>/search/<search_query>``.

        Raises:
            InvalidArgumentError: If resource_name or search_query is blank.
        """
        validate_input_params({"resourceName": resource_name, "searchQuery": search_query})
        url = self.resource_url(resource_name, f"{SEARCH}/{search_query}")
        return await self.get_http(url, self.prepare_options(options))

    def prepare_options(self, options: GetOption | None) -> GetOption | None:
        return options
