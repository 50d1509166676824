"""HTTP service for plain resource collections."""

from __future__ import annotations

from typing import Any

from hateoas_client.http.base import BaseHttpService
from hateoas_client.model.collection import ResourceCollection
from hateoas_client.model.options import GetOption
from hateoas_client.resolve.classifier import ResourceKind
from hateoas_client.util.validation import validate_input_params


class ResourceCollectionHttpService(BaseHttpService):
    kind = ResourceKind.RESOURCE_COLLECTION

    async def get_resource_collection(
        self,
        resource_name: str,
        query: str | None = None,
        options: GetOption | None = None,
    ) -> ResourceCollection[Any]:
        """GET ``<base>/<resource_name>[/<query>]`` as a collection.

        Raises:
            InvalidArgumentError: If resource_name is blank.
            WrongResourceKindError: If the response is not a plain collection.
        """
        validate_input_params({"resourceName": resource_name})
        return await self.get_http(self.resource_url(resource_name, query), options)
