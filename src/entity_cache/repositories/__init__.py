"""Repository layer for data access.

This layer abstracts external dependencies (Redis, HTTP APIs, the network)
behind protocol-based interfaces. This enables:
- Easy swapping of implementations (Redis → in-memory, HTTP → gRPC, etc.)
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from entity_cache.protocols import CacheStore, ConnectivityProbe, RemoteSource

from .connectivity import HttpConnectivityProbe, StaticConnectivityProbe
from .http_remote_source import HttpRemoteSource
from .memory_cache_store import InMemoryCacheStore
from .redis_cache_store import RedisCacheStore

__all__ = [
    "CacheStore",
    "ConnectivityProbe",
    "RemoteSource",
    "HttpConnectivityProbe",
    "StaticConnectivityProbe",
    "HttpRemoteSource",
    "InMemoryCacheStore",
    "RedisCacheStore",
]
