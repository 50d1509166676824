"""Tests for ResourceCache and CacheKey."""

from __future__ import annotations

import httpx
import pytest

from hateoas_client.adapters.cache import InMemoryCacheAdapter
from hateoas_client.cache import CacheKey, ResourceCache
from hateoas_client.model.resource import Resource
from tests.conftest import BASE_URL


def make_resource(resource_id: int = 1) -> Resource:
    return Resource(
        properties={"name": "Test product"},
        links={"self": {"href": f"{BASE_URL}/products/{resource_id}"}},
    )


class TestCacheKey:
    """Tests for CacheKey normalization."""

    def test_param_order_does_not_matter(self) -> None:
        first = CacheKey.of(f"{BASE_URL}/products", {"a": 1, "b": 2})
        second = CacheKey.of(f"{BASE_URL}/products", {"b": 2, "a": 1})
        assert first == second

    def test_trailing_slash_is_ignored(self) -> None:
        assert CacheKey.of(f"{BASE_URL}/products/") == CacheKey.of(f"{BASE_URL}/products")

    def test_repeated_keys_keep_relative_order(self) -> None:
        params = httpx.QueryParams([("sort", "b,ASC"), ("page", "0"), ("sort", "a,DESC")])
        key = CacheKey.of(f"{BASE_URL}/products", params)
        assert key.params == (("page", "0"), ("sort", "b,ASC"), ("sort", "a,DESC"))

    def test_different_params_give_different_keys(self) -> None:
        assert CacheKey.of(f"{BASE_URL}/products", {"page": 0}) != CacheKey.of(
            f"{BASE_URL}/products", {"page": 1}
        )

    def test_str(self) -> None:
        key = CacheKey.of(f"{BASE_URL}/products", [("size", "2"), ("sort", "name,ASC")])
        assert str(key) == f"{BASE_URL}/products?size=2&sort=name,ASC"
        assert str(CacheKey.of(f"{BASE_URL}/products")) == f"{BASE_URL}/products"

    def test_inline_query_merges_with_params(self) -> None:
        assert CacheKey.of("u?b=1&a=2") == CacheKey.of("u", {"a": "2", "b": "1"})
        assert CacheKey.of(f"{BASE_URL}/products?page=0", {"size": 20}) == CacheKey.of(
            f"{BASE_URL}/products", [("size", "20"), ("page", "0")]
        )

    def test_inline_sort_order_is_kept(self) -> None:
        inline = CacheKey.of(f"{BASE_URL}/products?sort=name,ASC&page=1&sort=id,DESC")
        assert inline.url == f"{BASE_URL}/products"
        assert inline.params == (("page", "1"), ("sort", "name,ASC"), ("sort", "id,DESC"))


class TestResourceCache:
    """Tests for ResourceCache."""

    @pytest.fixture
    def cache(self) -> ResourceCache:
        return ResourceCache()

    def test_put_and_get(self, cache: ResourceCache) -> None:
        key = CacheKey.of(f"{BASE_URL}/products/1")
        cache.put_resource(key, make_resource())

        assert cache.has_resource(key)
        assert cache.get_resource(key) == make_resource()

    def test_miss_returns_none(self, cache: ResourceCache) -> None:
        assert cache.get_resource(CacheKey.of(f"{BASE_URL}/products/1")) is None

    def test_cached_value_is_a_snapshot(self, cache: ResourceCache) -> None:
        key = CacheKey.of(f"{BASE_URL}/products/1")
        resource = make_resource()
        cache.put_resource(key, resource)

        resource.name = "Changed"
        returned = cache.get_resource(key)
        returned.name = "Changed again"

        assert cache.get_resource(key).name == "Test product"

    def test_snapshot_shares_links(self, cache: ResourceCache) -> None:
        key = CacheKey.of(f"{BASE_URL}/products/1")
        resource = make_resource()
        cache.put_resource(key, resource)

        assert cache.get_resource(key).links is resource.links

    def test_disabled_cache_stores_nothing(self) -> None:
        cache = ResourceCache(enabled=False)
        key = CacheKey.of(f"{BASE_URL}/products/1")
        cache.put_resource(key, make_resource())

        assert not cache.has_resource(key)
        assert cache.get_resource(key) is None

    def test_evict_resource_matches_path_segment(self, cache: ResourceCache) -> None:
        products = CacheKey.of(f"{BASE_URL}/products", {"page": 0})
        product = CacheKey.of(f"{BASE_URL}/products/1")
        product_types = CacheKey.of(f"{BASE_URL}/productTypes/1")
        for key in (products, product, product_types):
            cache.put_resource(key, make_resource())

        evicted = cache.evict_resource("products")

        assert evicted == 2
        assert not cache.has_resource(products)
        assert not cache.has_resource(product)
        assert cache.has_resource(product_types)

    def test_evict_resource_is_anchored_to_base_url(self) -> None:
        cache = ResourceCache(base_url=BASE_URL)
        products = CacheKey.of(f"{BASE_URL}/products/1")
        categories = CacheKey.of(f"{BASE_URL}/categories/1/products")
        for key in (products, categories):
            cache.put_resource(key, make_resource())

        assert cache.evict_resource("v1") == 0
        assert cache.evict_resource("api") == 0
        assert cache.evict_resource("products") == 1
        assert cache.has_resource(categories)

    def test_evict_resource_without_name_does_nothing(self, cache: ResourceCache) -> None:
        key = CacheKey.of(f"{BASE_URL}/products/1")
        cache.put_resource(key, make_resource())

        assert cache.evict_resource(None) == 0
        assert cache.has_resource(key)

    def test_lifetime_is_passed_to_adapter(self) -> None:
        adapter = InMemoryCacheAdapter()
        cache = ResourceCache(adapter=adapter, lifetime=60)
        cache.put_resource(CacheKey.of(f"{BASE_URL}/products/1"), make_resource())

        assert adapter._entries[f"{BASE_URL}/products/1"].expires_at is not None

    def test_clear_and_stats(self, cache: ResourceCache) -> None:
        key = CacheKey.of(f"{BASE_URL}/products/1")
        cache.put_resource(key, make_resource())
        cache.get_resource(key)
        cache.get_resource(CacheKey.of(f"{BASE_URL}/products/2"))

        stats = cache.get_stats()
        assert stats.hits == 1
        assert stats.misses == 1
        assert stats.size == 1

        cache.clear()
        assert cache.get_stats().size == 0
