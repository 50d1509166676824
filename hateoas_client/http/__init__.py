"""HTTP services: the shared request pipeline and one service per resource shape."""

from hateoas_client.http.collection_service import ResourceCollectionHttpService
from hateoas_client.http.executor import HttpExecutor
from hateoas_client.http.paged_service import PagedResourceCollectionHttpService
from hateoas_client.http.resource_service import ResourceHttpService

__all__ = [
    "HttpExecutor",
    "ResourceHttpService",
    "ResourceCollectionHttpService",
    "PagedResourceCollectionHttpService",
]
