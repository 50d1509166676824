"""Tests for ResourceFactory."""

from __future__ import annotations

from typing import Any

import pytest

from hateoas_client.errors import WrongResourceKindError
from hateoas_client.model.collection import PagedResourceCollection, ResourceCollection
from hateoas_client.model.resource import EmbeddedResource, Resource
from hateoas_client.resolve.classifier import ResourceKind
from hateoas_client.resolve.factory import ResourceFactory
from tests.conftest import BASE_URL


class Product(Resource):
    @property
    def label(self) -> str:
        return f"{self.name} ({self.price})"


class TestResourceFactory:
    """Tests for building typed objects from raw HAL JSON."""

    @pytest.fixture
    def factory(self) -> ResourceFactory:
        return ResourceFactory()

    def test_build_resource(self, factory: ResourceFactory, raw_resource_json: dict[str, Any]) -> None:
        resource = factory.build(raw_resource_json, ResourceKind.RESOURCE)

        assert isinstance(resource, Resource)
        assert resource.name == "Test product"
        assert resource["price"] == 100
        assert resource.self_href == f"{BASE_URL}/products/1"
        assert "_links" not in resource.properties

    def test_build_resource_collection(
        self, factory: ResourceFactory, raw_resource_collection_json: dict[str, Any]
    ) -> None:
        collection = factory.build(raw_resource_collection_json, ResourceKind.RESOURCE_COLLECTION)

        assert type(collection) is ResourceCollection
        assert len(collection) == 2
        assert [item.resource_id for item in collection] == ["1", "2"]
        assert collection.self_href == f"{BASE_URL}/products"

    def test_build_paged_resource_collection(
        self, factory: ResourceFactory, raw_paged_resource_collection_json: dict[str, Any]
    ) -> None:
        page = factory.build(raw_paged_resource_collection_json, ResourceKind.PAGED_RESOURCE_COLLECTION)

        assert isinstance(page, PagedResourceCollection)
        assert page.total_elements == 10
        assert page.total_pages == 5
        assert page.page_number == 0
        assert page.page_size == 2
        assert len(page) == 2

    def test_embedded_relations_become_properties(self, factory: ResourceFactory) -> None:
        raw = {
            "name": "Order",
            "_embedded": {
                "address": {"city": "Moscow"},
                "items": [
                    {"count": 1, "_links": {"self": {"href": f"{BASE_URL}/items/1"}}},
                    {"count": 2},
                ],
            },
            "_links": {"self": {"href": f"{BASE_URL}/orders/1"}},
        }

        order = factory.build_resource(raw)

        assert isinstance(order.address, EmbeddedResource)
        assert order.address.city == "Moscow"
        assert isinstance(order.items[0], Resource)
        assert isinstance(order.items[1], EmbeddedResource)
        assert order.items[1].count == 2

    def test_collection_walks_every_embedded_relation(self, factory: ResourceFactory) -> None:
        raw = {
            "_embedded": {
                "products": [{"_links": {"self": {"href": f"{BASE_URL}/products/1"}}}],
                "services": [{"_links": {"self": {"href": f"{BASE_URL}/services/7"}}}],
            },
            "_links": {"self": {"href": f"{BASE_URL}/catalog"}},
        }

        collection = factory.build(raw, ResourceKind.RESOURCE_COLLECTION)

        assert [item.self_href for item in collection] == [
            f"{BASE_URL}/products/1",
            f"{BASE_URL}/services/7",
        ]

    def test_paged_expected_but_resource_received(
        self, factory: ResourceFactory, raw_resource_json: dict[str, Any]
    ) -> None:
        with pytest.raises(WrongResourceKindError) as exc_info:
            factory.build(raw_resource_json, ResourceKind.PAGED_RESOURCE_COLLECTION)

        assert str(exc_info.value) == (
            "You try to get wrong resource type, expected paged resource collection type."
        )
        assert exc_info.value.expected is ResourceKind.PAGED_RESOURCE_COLLECTION
        assert exc_info.value.actual is ResourceKind.RESOURCE

    def test_resource_expected_but_collection_received(
        self, factory: ResourceFactory, raw_resource_collection_json: dict[str, Any]
    ) -> None:
        with pytest.raises(WrongResourceKindError, match="expected resource type"):
            factory.build(raw_resource_collection_json, ResourceKind.RESOURCE)

    def test_collection_expected_but_paged_received(
        self, factory: ResourceFactory, raw_paged_resource_collection_json: dict[str, Any]
    ) -> None:
        with pytest.raises(WrongResourceKindError) as exc_info:
            factory.build(raw_paged_resource_collection_json, ResourceKind.RESOURCE_COLLECTION)
        assert str(exc_info.value) == (
            "You try to get wrong resource type, expected resource collection type."
        )

    def test_build_any_returns_unknown_payload_as_is(self, factory: ResourceFactory) -> None:
        assert factory.build_any({"count": 3}) == {"count": 3}
        assert factory.build_any(None) is None

    def test_build_any_builds_known_shapes(
        self, factory: ResourceFactory, raw_resource_json: dict[str, Any]
    ) -> None:
        assert isinstance(factory.build_any(raw_resource_json), Resource)

    def test_custom_resource_type(self, raw_resource_json: dict[str, Any]) -> None:
        factory = ResourceFactory(resource_type=Product)

        product = factory.build(raw_resource_json, ResourceKind.RESOURCE)

        assert isinstance(product, Product)
        assert product.label == "Test product (100)"

    def test_client_is_passed_to_built_objects(
        self, factory: ResourceFactory, raw_resource_collection_json: dict[str, Any]
    ) -> None:
        marker = object()
        collection = factory.build(raw_resource_collection_json, ResourceKind.RESOURCE_COLLECTION, client=marker)  # type: ignore[arg-type]

        assert collection._client is marker
        assert all(item._client is marker for item in collection)
