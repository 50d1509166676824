"""Default adapters for hateoas-client ports.

Available Adapters:
    - InMemoryCacheAdapter: dictionary backed response cache with TTL
    - HttpxTransport: async HTTP transport over httpx with retries
"""

from hateoas_client.adapters.cache import InMemoryCacheAdapter
from hateoas_client.adapters.transport import HttpxTransport, RequestRecord

__all__ = [
    "InMemoryCacheAdapter",
    "HttpxTransport",
    "RequestRecord",
]
