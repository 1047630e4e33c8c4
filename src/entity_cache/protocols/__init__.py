"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis → SQLite, HTTP → gRPC, etc.)
- Unit testing with fake implementations
- Clear separation of concerns

Usage:
    ```python
    from entity_cache.protocols import CacheStore, ConnectivityProbe, RemoteSource

    # Type hints work with any implementation
    store: CacheStore = RedisCacheStore()     # works
    store: CacheStore = InMemoryCacheStore()  # also works
    ```
"""

from .cache_store import CacheStore
from .connectivity_probe import ConnectivityProbe
from .remote_source import RemoteSource

__all__ = [
    "CacheStore",
    "ConnectivityProbe",
    "RemoteSource",
]
