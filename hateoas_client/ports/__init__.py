from hateoas_client.ports.cache import CachePort, CacheStats
from hateoas_client.ports.transport import TransportPort

__all__ = [
    "CachePort",
    "CacheStats",
    "TransportPort",
]
