"""In-memory implementation of CacheStore.

Not durable. Used in tests and for local runs without Redis.
"""

import logging
import threading

from entity_cache.errors import CacheWriteFailed

logger = logging.getLogger(__name__)


class InMemoryCacheStore:
    """Dictionary-backed cache store.

    Satisfies the CacheStore protocol. A lock keeps reads and writes
    consistent when the store is shared between threads.
    """

    def __init__(self, key_prefix: str = "entity") -> None:
        self._records: dict[str, bytes] = {}
        self._lock = threading.Lock()
        self._key_prefix = key_prefix

    def get(self, key: str) -> bytes | None:
        with self._lock:
            value = self._records.get(key)
        logger.debug(f"Cache {'HIT' if value is not None else 'MISS'}: {key}")
        return value

    def set(self, key: str, data: bytes) -> CacheWriteFailed | None:
        with self._lock:
            self._records[key] = bytes(data)
        return None

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._records.pop(key, None) is not None

    def clear(self) -> int:
        """Remove every record and return how many there were."""
        with self._lock:
            count = len(self._records)
            self._records.clear()
        return count

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._records)

    def health_check(self) -> bool:
        return True

    def get_stats(self) -> dict:
        with self._lock:
            total = sum(1 for key in self._records if key.startswith(f"{self._key_prefix}:"))
        return {
            "backend": "memory",
            "key_prefix": self._key_prefix,
            "total_entries": total,
        }
