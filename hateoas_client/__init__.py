"""hateoas-client: async client for HAL hypermedia REST APIs.

Resources, collections and pages come back as typed objects whose relations
are followed through their ``_links``. GET responses are cached per URL and
params; mutations evict the affected resource name.

Example:
    >>> from hateoas_client import HateoasClient, HalConfiguration
    >>> config = HalConfiguration(base_api_url="http://localhost:8080/api/v1")
    >>> async with HateoasClient(config) as client:
    ...     product = await client.get_resource("products", 1)
    ...     category = await product.get_relation("category")
"""

__version__ = "0.1.0"

from hateoas_client.adapters import HttpxTransport, InMemoryCacheAdapter
from hateoas_client.cache import CacheKey, ResourceCache
from hateoas_client.client import HateoasClient
from hateoas_client.config import HalConfiguration, load_config
from hateoas_client.errors import (
    ConfigurationError,
    ErrorCode,
    HateoasClientError,
    InvalidArgumentError,
    MissingLinkError,
    ReservedParamConflictError,
    TransportError,
    TransportTimeoutError,
    UnboundResourceError,
    WrongResourceKindError,
)
from hateoas_client.model import (
    EmbeddedResource,
    GetOption,
    Link,
    PageData,
    PagedResourceCollection,
    PageParam,
    RequestOption,
    Resource,
    ResourceCollection,
    SortOrder,
)
from hateoas_client.observability import configure_logging
from hateoas_client.ports import CachePort, TransportPort
from hateoas_client.resolve import ResourceKind
from hateoas_client.resolve.factory import ResourceFactory

__all__ = [
    "__version__",
    "HateoasClient",
    "HalConfiguration",
    "load_config",
    "configure_logging",
    "Resource",
    "EmbeddedResource",
    "ResourceCollection",
    "PagedResourceCollection",
    "PageData",
    "Link",
    "GetOption",
    "PageParam",
    "RequestOption",
    "SortOrder",
    "ResourceKind",
    "ResourceFactory",
    "ResourceCache",
    "CacheKey",
    "CachePort",
    "TransportPort",
    "HttpxTransport",
    "InMemoryCacheAdapter",
    "HateoasClientError",
    "ErrorCode",
    "InvalidArgumentError",
    "ReservedParamConflictError",
    "WrongResourceKindError",
    "MissingLinkError",
    "UnboundResourceError",
    "ConfigurationError",
    "TransportError",
    "TransportTimeoutError",
]
