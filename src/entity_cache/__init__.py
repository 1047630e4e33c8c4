"""Entity Cache - read-through entity access with offline fallback.

Serves an entity by id from a live remote source when the network is
reachable, writes every successful fetch through to a local durable cache,
and answers from that cache when the network is not reachable.

Layers:
    - protocols: Interface contracts (CacheStore, RemoteSource, ConnectivityProbe)
    - repositories: Data access implementations (Redis, in-memory, httpx)
    - services: Business logic (EntityRepository)
    - handlers: HTTP endpoint handlers
    - dto: Storage record and API contracts
    - entities: Domain models (internal)
    - errors: Typed error values

Usage:
    ```python
    from entity_cache import EntityRepository, HttpConnectivityProbe, HttpRemoteSource, RedisCacheStore

    repository = EntityRepository.create(
        remote_source=HttpRemoteSource.create(),
        cache_store=RedisCacheStore.create(),
        connectivity_probe=HttpConnectivityProbe.create(),
    )
    result = await repository.get_entity(7)
    ```

For HTTP API:
    ```python
    from entity_cache.api.app import app
    ```
"""

from entity_cache.config import get_redis_client, settings
from entity_cache.dto import EntityRecord, deserialize_entity, serialize_entity
from entity_cache.entities import DataSource, Entity, EntityLookup
from entity_cache.errors import (
    CacheMiss,
    CacheWriteFailed,
    EntityError,
    EntityLookupError,
    InvalidArgument,
    RemoteError,
    RemoteErrorKind,
    RemoteUnavailable,
)
from entity_cache.handlers import EntityHandler
from entity_cache.protocols import CacheStore, ConnectivityProbe, RemoteSource
from entity_cache.repositories import (
    HttpConnectivityProbe,
    HttpRemoteSource,
    InMemoryCacheStore,
    RedisCacheStore,
    StaticConnectivityProbe,
)
from entity_cache.services import EntityRepository

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "CacheStore",
    "ConnectivityProbe",
    "RemoteSource",
    # Services (business logic)
    "EntityRepository",
    # Handlers (HTTP)
    "EntityHandler",
    # Repositories (data access)
    "RedisCacheStore",
    "InMemoryCacheStore",
    "HttpRemoteSource",
    "HttpConnectivityProbe",
    "StaticConnectivityProbe",
    # Entities (domain models)
    "Entity",
    "EntityLookup",
    "DataSource",
    # DTOs (storage record)
    "EntityRecord",
    "serialize_entity",
    "deserialize_entity",
    # Errors
    "InvalidArgument",
    "RemoteUnavailable",
    "RemoteError",
    "RemoteErrorKind",
    "CacheMiss",
    "CacheWriteFailed",
    "EntityError",
    "EntityLookupError",
]
