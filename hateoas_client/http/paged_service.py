"""HTTP service for paged resource collections."""

from __future__ import annotations

from typing import Any

from hateoas_client.http.base import BaseHttpService
from hateoas_client.model.collection import PagedResourceCollection
from hateoas_client.model.options import GetOption
from hateoas_client.resolve.classifier import ResourceKind
from hateoas_client.util.validation import validate_input_params


class PagedResourceCollectionHttpService(BaseHttpService):
    """Fetches paged collections; missing page params default to page 0."""

    kind = ResourceKind.PAGED_RESOURCE_COLLECTION

    async def get_resource_page(
        self,
        resource_name: str,
        query: str | None = None,
        options: GetOption | None = None,
    ) -> PagedResourceCollection[Any]:
        """GET ``<base>/<resource_name>[/<query>]`` as a paged collection.

        Raises:
            InvalidArgumentError: If resource_name is blank.
            WrongResourceKindError: If the response is not a paged collection.
        """
        validate_input_params({"resourceName": resource_name})
        url = self.resource_url(resource_name, query)
        return await self.get_http(url, self.prepare_options(options))

    def prepare_options(self, options: GetOption | None) -> GetOption:
        return (options or GetOption()).with_default_page(self.executor.config.default_page_size)
