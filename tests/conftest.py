"""
Shared fixtures and fake collaborators.
"""

import asyncio

import pytest

from entity_cache.entities import Entity
from entity_cache.errors import CacheWriteFailed, RemoteError, RemoteErrorKind
from entity_cache.repositories import InMemoryCacheStore, StaticConnectivityProbe
from entity_cache.services import EntityRepository

ADA = Entity(id=7, name="Ada", email="ada@example.com")
GRACE = Entity(id=9, name="Grace", email="grace@example.com")


class FakeRemoteSource:
    """RemoteSource that serves a fixed set of entities and records calls."""

    def __init__(self, entities: list[Entity] | None = None, error: RemoteError | None = None):
        self.entities = {entity.id: entity for entity in entities or []}
        self.error = error
        self.calls: list = []

    async def fetch(self, entity_id):
        self.calls.append(entity_id)
        if self.error is not None:
            return self.error
        entity = self.entities.get(entity_id)
        if entity is None:
            return RemoteError(RemoteErrorKind.NOT_FOUND, f"{entity_id!r} not found")
        return entity


class BlockingRemoteSource:
    """RemoteSource that waits until released, for cancellation tests."""

    def __init__(self, entity: Entity):
        self.entity = entity
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def fetch(self, entity_id):
        self.started.set()
        await self.release.wait()
        return self.entity


class FailingWriteCacheStore(InMemoryCacheStore):
    """Store whose writes always report CacheWriteFailed."""

    def set(self, key, data):
        return CacheWriteFailed(key=key, message="disk full")


class RaisingWriteCacheStore(InMemoryCacheStore):
    """Store whose writes raise instead of returning a failure value."""

    def set(self, key, data):
        raise RuntimeError("backend exploded")


class RaisingProbe:
    async def is_connected(self):
        raise OSError("no route to host")


class HangingProbe:
    async def is_connected(self):
        await asyncio.sleep(10)
        return True


def make_repository(
    remote_source=None,
    cache_store=None,
    probe=None,
    cache_mode: str = "keyed",
    serve_stale_on_error: bool = False,
) -> EntityRepository:
    """Build a repository with explicit settings, independent of the environment."""
    return EntityRepository(
        remote_source=remote_source or FakeRemoteSource([ADA, GRACE]),
        cache_store=cache_store if cache_store is not None else InMemoryCacheStore(),
        connectivity_probe=probe or StaticConnectivityProbe(connected=True),
        key_prefix="entity",
        cache_mode=cache_mode,
        probe_timeout=0.2,
        serve_stale_on_error=serve_stale_on_error,
    )


@pytest.fixture
def remote_source():
    """Create a fake remote source serving Ada and Grace."""
    return FakeRemoteSource([ADA, GRACE])


@pytest.fixture
def cache_store():
    """Create an empty in-memory cache store."""
    return InMemoryCacheStore()


@pytest.fixture
def probe():
    """Create a probe that reports connected."""
    return StaticConnectivityProbe(connected=True)


@pytest.fixture
def repository(remote_source, cache_store, probe):
    """Create a keyed-mode repository over the fakes."""
    return make_repository(remote_source, cache_store, probe)
