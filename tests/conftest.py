"""Pytest fixtures for hateoas-client tests."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

import pytest

from hateoas_client.cache import ResourceCache
from hateoas_client.client import HateoasClient
from hateoas_client.config.settings import HalConfiguration
from hateoas_client.http.executor import HttpExecutor
from hateoas_client.ports.transport import TransportPort
from hateoas_client.resolve.factory import ResourceFactory

BASE_URL = "http://localhost:8080/api/v1"


@dataclass
class RecordedCall:
    """A request seen by FakeTransport."""

    method: str
    url: str
    body: Any = None
    params: Any = None
    headers: dict[str, str] | None = None


@dataclass
class FakeTransport(TransportPort):
    """Transport returning canned bodies and recording every call.

    Responses are looked up by ``(method, url)``; a queued exception is
    raised instead of returning.
    """

    responses: dict[tuple[str, str], Any] = field(default_factory=dict)
    calls: list[RecordedCall] = field(default_factory=list)
    connected: bool = False

    def respond(self, method: str, url: str, body: Any) -> None:
        self.responses[(method, url)] = body

    def fail(self, method: str, url: str, error: Exception) -> None:
        self.responses[(method, url)] = error

    def calls_to(self, method: str, url: str) -> list[RecordedCall]:
        return [call for call in self.calls if call.method == method and call.url == url]

    async def _handle(self, method: str, url: str, body: Any, params: Any, headers: Any) -> Any:
        self.calls.append(RecordedCall(method, url, body, params, headers))
        response = self.responses.get((method, url))
        if isinstance(response, Exception):
            raise response
        return copy.deepcopy(response)

    async def get(self, url: str, params: Any = None, headers: dict[str, str] | None = None) -> Any:
        return await self._handle("GET", url, None, params, headers)

    async def post(self, url: str, body: Any = None, params: Any = None, headers: dict[str, str] | None = None) -> Any:
        return await self._handle("POST", url, body, params, headers)

    async def put(self, url: str, body: Any = None, params: Any = None, headers: dict[str, str] | None = None) -> Any:
        return await self._handle("PUT", url, body, params, headers)

    async def patch(self, url: str, body: Any = None, params: Any = None, headers: dict[str, str] | None = None) -> Any:
        return await self._handle("PATCH", url, body, params, headers)

    async def delete(self, url: str, params: Any = None, headers: dict[str, str] | None = None) -> Any:
        return await self._handle("DELETE", url, None, params, headers)

    async def connect(self) -> None:
        self.connected = True

    async def close(self) -> None:
        self.connected = False


def raw_resource(name: str = "products", /, resource_id: int = 1, **properties: Any) -> dict[str, Any]:
    href = f"{BASE_URL}/{name}/{resource_id}"
    return {
        "name": "Test product",
        "price": 100,
        **properties,
        "_links": {
            "self": {"href": href},
            name[:-1]: {"href": href},
            "category": {"href": f"{href}/category"},
            "reviews": {"href": f"{href}/reviews{{?page,size,sort,projection}}", "templated": True},
        },
    }


@pytest.fixture
def raw_resource_json() -> dict[str, Any]:
    return raw_resource()


@pytest.fixture
def raw_embedded_resource_json() -> dict[str, Any]:
    return {"city": "Moscow", "street": "Tverskaya"}


@pytest.fixture
def raw_resource_collection_json() -> dict[str, Any]:
    return {
        "_embedded": {"products": [raw_resource(resource_id=1), raw_resource(resource_id=2)]},
        "_links": {"self": {"href": f"{BASE_URL}/products"}},
    }


@pytest.fixture
def raw_paged_resource_collection_json() -> dict[str, Any]:
    return {
        "_embedded": {"products": [raw_resource(resource_id=1), raw_resource(resource_id=2)]},
        "_links": {
            "first": {"href": f"{BASE_URL}/products?page=0&size=2"},
            "self": {"href": f"{BASE_URL}/products?page=0&size=2"},
            "next": {"href": f"{BASE_URL}/products?page=1&size=2"},
            "last": {"href": f"{BASE_URL}/products?page=4&size=2"},
        },
        "page": {"size": 2, "totalElements": 10, "totalPages": 5, "number": 0},
    }


@pytest.fixture
def config() -> HalConfiguration:
    return HalConfiguration(base_api_url=BASE_URL)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def executor(transport: FakeTransport, config: HalConfiguration) -> HttpExecutor:
    return HttpExecutor(transport, ResourceCache(base_url=config.base_api_url), ResourceFactory(), config)


@pytest.fixture
def client(transport: FakeTransport, config: HalConfiguration) -> HateoasClient:
    return HateoasClient(config=config, transport=transport)
