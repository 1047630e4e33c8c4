#!/usr/bin/env python3
"""
Demo script for the entity cache.

Fetches a few users from the configured remote API while online (filling
the cache), then switches the connectivity probe off and serves the same
users from the cache. Uses Redis when REDIS_URL is reachable, otherwise an
in-memory store.
"""

import asyncio

from entity_cache import (
    CacheStore,
    Entity,
    EntityLookup,
    EntityRepository,
    HttpRemoteSource,
    InMemoryCacheStore,
    RedisCacheStore,
    StaticConnectivityProbe,
)
from entity_cache.config import configure_logging


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def pick_cache_store() -> CacheStore:
    """Use Redis if it answers, else fall back to memory."""
    store = RedisCacheStore.create()
    if store.health_check():
        print("Using Redis cache store")
        return store
    print("Redis not reachable, using in-memory cache store")
    return InMemoryCacheStore()


def show(entity_id, result) -> None:
    if isinstance(result, EntityLookup):
        entity: Entity = result.entity
        print(f"  ✓ {entity_id!r}: {entity.name} <{entity.email}> (from {result.source.value})")
    else:
        print(f"  ✗ {entity_id!r}: {result.code} {result.message}")


async def main() -> None:
    configure_logging("WARNING")

    probe = StaticConnectivityProbe(connected=True)
    remote_source = HttpRemoteSource.create()
    repository = EntityRepository.create(
        remote_source=remote_source,
        cache_store=pick_cache_store(),
        connectivity_probe=probe,
    )

    try:
        print_section("Online: fetch and write through")
        for entity_id in (1, 2, 3, 999):
            show(entity_id, await repository.lookup(entity_id))

        print_section("Offline: serve from cache")
        probe.set_connected(False)
        for entity_id in (1, 2, 3, 4):
            show(entity_id, await repository.lookup(entity_id))

        print_section("Invalid input")
        show(0, await repository.lookup(0))
    finally:
        await remote_source.close()


if __name__ == "__main__":
    asyncio.run(main())
