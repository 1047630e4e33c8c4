"""Cache storage protocol.

Defines the interface for the durable key -> serialized-value store that
keeps the local copy of entities.

Implementations can include:
- Redis (default, persisted with RDB/AOF)
- In-memory dictionary (tests, local runs)
- SQLite, a file on disk, or any other key-value backend
"""

from typing import Protocol, runtime_checkable

from entity_cache.errors import CacheWriteFailed


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for cache storage backends.

    Similar to Go's interface pattern - any type that implements these
    methods satisfies the protocol, no explicit inheritance needed.

    Writes to the same key are last-write-wins. The store is responsible
    for its own consistency under concurrent access.

    Example:
        ```python
        from entity_cache.protocols import CacheStore

        store: CacheStore = RedisCacheStore()
        store: CacheStore = InMemoryCacheStore()
        ```
    """

    def get(self, key: str) -> bytes | None:
        """Read the record stored under a key.

        Args:
            key: The cache key

        Returns:
            The stored bytes, or None if nothing is stored (or the read failed)
        """
        ...

    def set(self, key: str, data: bytes) -> CacheWriteFailed | None:
        """Store a record, replacing any previous one.

        Args:
            key: The cache key
            data: Serialized record

        Returns:
            CacheWriteFailed if the write did not succeed, None otherwise
        """
        ...

    def delete(self, key: str) -> bool:
        """Delete the record stored under a key.

        Args:
            key: The cache key

        Returns:
            True if a record was deleted, False otherwise
        """
        ...

    def health_check(self) -> bool:
        """Check if the store is accessible.

        Returns:
            True if healthy, False otherwise
        """
        ...

    def get_stats(self) -> dict:
        """Get store statistics.

        Returns:
            Dictionary with stats (implementation-specific)
        """
        ...
