"""Redis implementation of CacheStore.

Stores one serialized record per key as a plain Redis string. With Redis
persistence (RDB/AOF) enabled, records survive process and server restarts.
It's the default implementation and satisfies the CacheStore protocol.
"""

import logging

import redis

from entity_cache.config import get_redis_client, settings
from entity_cache.errors import CacheWriteFailed

logger = logging.getLogger(__name__)


class RedisCacheStore:
    """Redis key-value cache store.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Redis errors never escape: failed reads are reported as a miss (None),
    failed writes as a CacheWriteFailed value.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
        ttl: int | None = None,
    ) -> None:
        """Initialize the Redis cache store.

        Args:
            redis_client: Redis client instance. If None, creates default.
            key_prefix: Prefix shared by all keys, used for stats.
            ttl: Time-to-live for records in seconds. 0 or None keeps them forever.
        """
        self._client = redis_client or get_redis_client()
        self._key_prefix = key_prefix or settings.cache_key_prefix
        self._ttl = ttl if ttl is not None else settings.cache_ttl

    @classmethod
    def create(
        cls,
        key_prefix: str | None = None,
        ttl: int | None = None,
    ) -> "RedisCacheStore":
        """Factory method to create RedisCacheStore with defaults.

        Args:
            key_prefix: Key prefix. If None, uses settings.
            ttl: Record TTL in seconds. If None, uses settings.

        Returns:
            Configured RedisCacheStore
        """
        return cls(key_prefix=key_prefix, ttl=ttl)

    def get(self, key: str) -> bytes | None:
        """Read the record stored under a key.

        Args:
            key: The cache key

        Returns:
            The stored bytes, or None on a miss or a Redis error
        """
        try:
            value = self._client.get(key)
        except redis.RedisError as e:
            logger.error(f"Redis read failed for {key}: {e}")
            return None

        if value is None:
            logger.debug(f"Cache MISS: {key}")
            return None

        logger.debug(f"Cache HIT: {key}")
        if isinstance(value, str):
            return value.encode("utf-8")
        return value  # type: ignore[return-value]

    def set(self, key: str, data: bytes) -> CacheWriteFailed | None:
        """Store a record, replacing any previous one.

        Args:
            key: The cache key
            data: Serialized record

        Returns:
            CacheWriteFailed on a Redis error, None otherwise
        """
        try:
            self._client.set(key, data, ex=self._ttl or None)
        except redis.RedisError as e:
            logger.error(f"Redis write failed for {key}: {e}")
            return CacheWriteFailed(key=key, message=str(e))

        logger.debug(f"Cached: {key}")
        return None

    def delete(self, key: str) -> bool:
        """Delete the record stored under a key.

        Args:
            key: The cache key

        Returns:
            True if deleted, False otherwise
        """
        try:
            result: int = self._client.delete(key)  # type: ignore[assignment]
        except redis.RedisError as e:
            logger.error(f"Redis delete failed for {key}: {e}")
            return False
        return result > 0

    def count_all(self) -> int:
        """Count records under the key prefix.

        Returns:
            Number of cached records
        """
        count = 0
        for _ in self._client.scan_iter(match=f"{self._key_prefix}:*"):
            count += 1
        return count

    def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False

    def get_stats(self) -> dict:
        """Get store statistics.

        Returns:
            Dictionary with stats
        """
        try:
            total = self.count_all()
        except redis.RedisError as e:
            logger.error(f"Redis scan failed: {e}")
            total = 0
        return {
            "backend": "redis",
            "key_prefix": self._key_prefix,
            "total_entries": total,
            "ttl": self._ttl,
        }

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
