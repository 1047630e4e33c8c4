"""Entity repository: the read-through / cache-aside read path.

This service orchestrates the connectivity probe, the remote source and the
cache store into a single "get an entity by id" operation:

    connected     -> remote fetch -> write-through to cache -> entity
    not connected -> cache read                              -> entity

Failures come back as typed values (see entity_cache.errors), never as
exceptions. The only exception that escapes is asyncio.CancelledError,
and a cancelled fetch never writes to the cache.
"""

import asyncio
import logging

from entity_cache.config import settings
from entity_cache.dto import deserialize_entity, serialize_entity
from entity_cache.entities import DataSource, Entity, EntityId, EntityLookup, validate_entity_id
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
from entity_cache.protocols import CacheStore, ConnectivityProbe, RemoteSource

logger = logging.getLogger(__name__)

SINGLE_SLOT_SUFFIX = "last"


class EntityRepository:
    """Single source of truth for "get an entity by id".

    This service depends on PROTOCOLS, not concrete implementations:
    - RemoteSource: HTTP API, gRPC, a fake in tests
    - CacheStore: Redis, in-memory, etc.
    - ConnectivityProbe: HTTP HEAD check, a static flag

    Collaborators are passed in explicitly; there is no global registry.

    Example:
        ```python
        from entity_cache.repositories import (
            HttpConnectivityProbe,
            HttpRemoteSource,
            RedisCacheStore,
        )
        from entity_cache.services import EntityRepository

        repository = EntityRepository.create(
            remote_source=HttpRemoteSource.create(),
            cache_store=RedisCacheStore.create(),
            connectivity_probe=HttpConnectivityProbe.create(),
        )

        result = await repository.get_entity(7)
        if isinstance(result, Entity):
            print(result.name)
        ```
    """

    def __init__(
        self,
        remote_source: RemoteSource,
        cache_store: CacheStore,
        connectivity_probe: ConnectivityProbe,
        key_prefix: str | None = None,
        cache_mode: str | None = None,
        probe_timeout: float | None = None,
        serve_stale_on_error: bool | None = None,
    ) -> None:
        """Initialize the entity repository.

        Args:
            remote_source: Authoritative entity source (required).
            cache_store: Local durable store (required).
            connectivity_probe: Reachability check (required).
            key_prefix: Prefix for cache keys. Defaults to settings.
            cache_mode: "keyed" (one record per id) or "single_slot" (last
                fetched entity only). Defaults to settings.
            probe_timeout: Upper bound for the connectivity check in seconds.
                Defaults to settings.
            serve_stale_on_error: Serve a cached copy when the remote fails
                with a server error or timeout. Defaults to settings.
        """
        self._remote = remote_source
        self._cache = cache_store
        self._probe = connectivity_probe
        self._key_prefix = key_prefix or settings.cache_key_prefix
        self._cache_mode = cache_mode or settings.cache_mode
        self._probe_timeout = probe_timeout or settings.probe_timeout
        self._serve_stale = (
            settings.serve_stale_on_error if serve_stale_on_error is None else serve_stale_on_error
        )

        if self._cache_mode not in ("keyed", "single_slot"):
            raise ValueError(f"Unknown cache mode: {self._cache_mode!r}")

    @classmethod
    def create(
        cls,
        remote_source: RemoteSource,
        cache_store: CacheStore,
        connectivity_probe: ConnectivityProbe,
        cache_mode: str | None = None,
        serve_stale_on_error: bool | None = None,
    ) -> "EntityRepository":
        """Factory method to create EntityRepository with settings defaults.

        Args:
            remote_source: Authoritative entity source (required).
            cache_store: Local durable store (required).
            connectivity_probe: Reachability check (required).
            cache_mode: Cache key mode. If None, uses settings.
            serve_stale_on_error: Stale fallback. If None, uses settings.

        Returns:
            Configured EntityRepository instance
        """
        return cls(
            remote_source=remote_source,
            cache_store=cache_store,
            connectivity_probe=connectivity_probe,
            cache_mode=cache_mode,
            serve_stale_on_error=serve_stale_on_error,
        )

    async def get_entity(self, entity_id: EntityId) -> Entity | EntityError:
        """Get an entity by id, from the remote when online, else from cache.

        Callers cannot tell from the returned Entity whether it is fresh or
        cached; use lookup() when the source matters.

        Args:
            entity_id: The entity identifier

        Returns:
            The Entity, or InvalidArgument / RemoteUnavailable / CacheMiss
        """
        result = await self.lookup(entity_id)
        if isinstance(result, EntityLookup):
            return result.entity
        return result

    async def get_entity_or_raise(self, entity_id: EntityId) -> Entity:
        """Like get_entity(), but raise EntityLookupError on failure."""
        result = await self.get_entity(entity_id)
        if isinstance(result, Entity):
            return result
        raise EntityLookupError(result)

    async def lookup(self, entity_id: EntityId) -> EntityLookup | EntityError:
        """Get an entity by id together with where it came from.

        Business logic:
        1. Validate the id (no I/O on failure)
        2. Ask the connectivity probe; an inconclusive answer means offline
        3. Online: fetch from the remote, write through to the cache
           (a fetched entity that cannot be stored is a server error)
        4. Offline: read the cached record

        Args:
            entity_id: The entity identifier

        Returns:
            EntityLookup on success, otherwise an EntityError value
        """
        invalid = validate_entity_id(entity_id)
        if invalid is not None:
            return invalid

        key = self.cache_key_for(entity_id)

        if not await self.is_connected():
            cached = self._read_cache(entity_id, key)
            if isinstance(cached, CacheMiss):
                logger.info(f"Offline and no cached entity for {entity_id!r} ({cached.reason})")
                return cached
            return EntityLookup(entity=cached, source=DataSource.CACHE)

        result = await self._remote.fetch(entity_id)

        if isinstance(result, RemoteError):
            logger.warning(f"Remote fetch failed for {entity_id!r}: {result.kind.value} {result.message}")
            if self._serve_stale and result.kind is not RemoteErrorKind.NOT_FOUND:
                cached = self._read_cache(entity_id, key)
                if isinstance(cached, Entity):
                    logger.warning(f"Serving stale cached entity for {entity_id!r}")
                    return EntityLookup(entity=cached, source=DataSource.CACHE, stale=True)
            return RemoteUnavailable.from_remote_error(result)

        # Every returned success must be storable
        try:
            data = serialize_entity(result)
        except ValueError as e:
            logger.warning(f"Remote returned an invalid entity for {entity_id!r}: {e}")
            return RemoteUnavailable(RemoteErrorKind.SERVER_ERROR, "Remote returned an invalid entity")

        self._write_through(key, data)
        return EntityLookup(entity=result, source=DataSource.REMOTE)

    async def is_connected(self) -> bool:
        """Ask the probe, bounded by the probe timeout.

        A probe that raises or does not answer in time counts as offline.
        """
        try:
            return bool(
                await asyncio.wait_for(self._probe.is_connected(), timeout=self._probe_timeout)
            )
        except asyncio.TimeoutError:
            logger.warning(f"Connectivity probe timed out after {self._probe_timeout}s, assuming offline")
            return False
        except Exception as e:
            logger.warning(f"Connectivity probe failed, assuming offline: {e}")
            return False

    def invalidate(self, entity_id: EntityId) -> bool | InvalidArgument:
        """Delete the cached record for an id.

        In single-slot mode the slot is only cleared if it holds this id.

        Args:
            entity_id: The entity identifier

        Returns:
            True if a record was deleted, False if there was none,
            InvalidArgument for a bad id
        """
        invalid = validate_entity_id(entity_id)
        if invalid is not None:
            return invalid

        key = self.cache_key_for(entity_id)
        if self._cache_mode == "single_slot" and not isinstance(
            self._read_cache(entity_id, key), Entity
        ):
            return False
        return self._cache.delete(key)

    def cache_key_for(self, entity_id: EntityId) -> str:
        """Build the cache key for an id.

        Keyed mode tags the id type so that 7 and "7" get separate records.
        """
        if self._cache_mode == "single_slot":
            return f"{self._key_prefix}:{SINGLE_SLOT_SUFFIX}"
        type_tag = "int" if isinstance(entity_id, int) else "str"
        return f"{self._key_prefix}:{type_tag}:{entity_id}"

    def _read_cache(self, entity_id: EntityId, key: str) -> Entity | CacheMiss:
        data = self._cache.get(key)
        if data is None:
            return CacheMiss(key=key, reason="not_found")

        try:
            entity = deserialize_entity(data)
        except ValueError as e:
            logger.warning(f"Corrupt cache record under {key}: {e}")
            return CacheMiss(key=key, reason="corrupt_record")

        if entity.id != entity_id or type(entity.id) is not type(entity_id):
            return CacheMiss(key=key, reason="id_mismatch")
        return entity

    def _write_through(self, key: str, data: bytes) -> None:
        try:
            failure = self._cache.set(key, data)
        except Exception as e:
            failure = CacheWriteFailed(key=key, message=str(e))

        if failure is not None:
            logger.warning(f"Cache write failed for {failure.key}: {failure.message}")

    async def is_healthy(self) -> bool:
        """Check if the cache store is healthy.

        Being offline is a normal operating state and does not count.
        """
        return self._cache.health_check()

    def get_stats(self) -> dict:
        """Get repository statistics.

        Returns:
            Dictionary with cache statistics
        """
        stats = self._cache.get_stats()
        stats["cache_mode"] = self._cache_mode
        stats["key_prefix"] = self._key_prefix
        stats["serve_stale_on_error"] = self._serve_stale
        return stats

    @property
    def cache_mode(self) -> str:
        return self._cache_mode
