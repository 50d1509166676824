"""HTTP service for single resources: reads, search and mutations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from hateoas_client.http.base import BaseHttpService
from hateoas_client.model.options import GetOption, RequestOption
from hateoas_client.model.resource import BaseResource, Resource, to_request_body
from hateoas_client.resolve.classifier import ResourceKind
from hateoas_client.util.url import convert_to_params, remove_template_params
from hateoas_client.util.validation import validate_input_params


class ResourceHttpService(BaseHttpService):
    """Reads single resources and performs create/update/patch/delete.

    Mutations bypass the cache and evict every entry under the affected
    resource name once the server accepted them. Their result is the built
    resource when the server echoes one, else the raw body (None for 204).
    """

    kind = ResourceKind.RESOURCE

    async def get_resource(
        self,
        resource_name: str,
        resource_id: Any,
        options: GetOption | None = None,
    ) -> Resource:
        """GET ``<base>/<resource_name>/<resource_id>``.

        Raises:
            InvalidArgumentError: If resource_name or resource_id is blank.
            WrongResourceKindError: If the response is not a single resource.
        """
        validate_input_params({"resourceName": resource_name, "id": resource_id})
        return await self.get_http(self.resource_url(resource_name, str(resource_id)), options)

    async def create_resource(
        self,
        resource_name: str,
        body: BaseResource | Mapping[str, Any],
        options: RequestOption | None = None,
    ) -> Any:
        """POST ``body`` to ``<base>/<resource_name>``."""
        validate_input_params({"resourceName": resource_name, "body": body})
        return await self._send("POST", self.resource_url(resource_name), resource_name, body, options)

    async def update_resource(self, entity: Resource, body: Mapping[str, Any] | None = None) -> Any:
        """PUT ``body`` (or the entity itself) to the entity's self link."""
        validate_input_params({"entity": entity})
        return await self._send_to_entity("PUT", entity, body)

    async def update_resource_by_id(
        self,
        resource_name: str,
        resource_id: Any,
        body: BaseResource | Mapping[str, Any],
        options: RequestOption | None = None,
    ) -> Any:
        validate_input_params({"resourceName": resource_name, "id": resource_id, "body": body})
        url = self.resource_url(resource_name, str(resource_id))
        return await self._send("PUT", url, resource_name, body, options)

    async def patch_resource(self, entity: Resource, body: Mapping[str, Any] | None = None) -> Any:
        """PATCH ``body`` (or the entity itself) to the entity's self link."""
        validate_input_params({"entity": entity})
        return await self._send_to_entity("PATCH", entity, body)

    async def patch_resource_by_id(
        self,
        resource_name: str,
        resource_id: Any,
        body: BaseResource | Mapping[str, Any],
        options: RequestOption | None = None,
    ) -> Any:
        validate_input_params({"resourceName": resource_name, "id": resource_id, "body": body})
        url = self.resource_url(resource_name, str(resource_id))
        return await self._send("PATCH", url, resource_name, body, options)

    async def delete_resource(self, entity: Resource) -> Any:
        """DELETE the entity's self link."""
        validate_input_params({"entity": entity})
        url = remove_template_params(entity.self_href)
        return await self._send("DELETE", url, self.executor.resource_name_of(url))

    async def delete_resource_by_id(
        self,
        resource_name: str,
        resource_id: Any,
        options: RequestOption | None = None,
    ) -> Any:
        validate_input_params({"resourceName": resource_name, "id": resource_id})
        url = self.resource_url(resource_name, str(resource_id))
        return await self._send("DELETE", url, resource_name, None, options)

    async def _send_to_entity(self, method: str, entity: Resource, body: Mapping[str, Any] | None) -> Any:
        url = remove_template_params(entity.self_href)
        payload = body if body is not None else entity
        return await self._send(method, url, self.executor.resource_name_of(url), payload)

    async def _send(
        self,
        method: str,
        url: str,
        resource_name: str | None,
        body: Any = None,
        options: RequestOption | None = None,
    ) -> Any:
        raw = await self.executor.send(
            method,
            url,
            body=prepare_body(body),
            params=convert_to_params(options),
            resource_name=resource_name,
        )
        return self.executor.factory.build_any(raw, client=self.executor)


def prepare_body(body: Any) -> Any:
    """JSON body of a create/update/patch: resources become their property dict."""
    if body is None:
        return None
    if isinstance(body, BaseResource):
        return body.to_dict()
    return to_request_body(body)
