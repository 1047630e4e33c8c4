"""
Tests for the entity cache API.
"""

import pytest
from conftest import ADA, FakeRemoteSource, make_repository
from fastapi import FastAPI
from fastapi.testclient import TestClient

from entity_cache.api import dependencies
from entity_cache.api.app import app
from entity_cache.dto import serialize_entity
from entity_cache.errors import RemoteError, RemoteErrorKind
from entity_cache.repositories import InMemoryCacheStore, StaticConnectivityProbe


@pytest.fixture
def probe():
    """Create a probe that reports connected."""
    return StaticConnectivityProbe(connected=True)


@pytest.fixture
def store():
    """Create an empty in-memory store."""
    return InMemoryCacheStore()


@pytest.fixture
def remote():
    """Create a fake remote source serving Ada."""
    return FakeRemoteSource([ADA])


@pytest.fixture
def client(remote, store, probe):
    """Create a test client over an in-memory repository."""
    app.state.entity_repository = make_repository(remote, store, probe)
    with TestClient(app) as test_client:
        yield test_client


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["name"] == "Entity Cache API"


def test_health(client, probe):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "cache_healthy": True, "connected": True}

    probe.set_connected(False)
    assert client.get("/health").json()["connected"] is False


def test_get_entity_online(client, store):
    """Test fresh fetch is returned and cached."""
    response = client.get("/entities/7")

    assert response.status_code == 200
    assert response.json() == {
        "id": 7,
        "name": "Ada",
        "email": "ada@example.com",
        "source": "remote",
        "stale": False,
    }
    assert store.get("entity:int:7") == serialize_entity(ADA)


def test_get_entity_offline_from_cache(client, store, probe, remote):
    """Test offline read is served from the cache."""
    store.set("entity:int:7", serialize_entity(ADA))
    probe.set_connected(False)

    response = client.get("/entities/7")

    assert response.status_code == 200
    assert response.json()["source"] == "cache"
    assert remote.calls == []


def test_get_entity_offline_miss(client, probe):
    """Test offline with empty cache is 503 cache_miss."""
    probe.set_connected(False)

    response = client.get("/entities/9")

    assert response.status_code == 503
    assert response.json()["detail"]["error"] == "cache_miss"
    assert response.json()["detail"]["reason"] == "not_found"
    assert response.json()["detail"]["kind"] is None


def test_invalid_id(client, remote):
    """Test non-numeric id is rejected before any call."""
    response = client.get("/entities/abc")

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "invalid_argument"
    assert remote.calls == []


def test_zero_id(client):
    """Test id 0 is rejected by the repository."""
    response = client.get("/entities/0")

    assert response.status_code == 400


def test_not_found(client):
    """Test unknown id maps to 404."""
    response = client.get("/entities/404")

    assert response.status_code == 404
    assert response.json()["detail"] == {
        "error": "remote_unavailable",
        "message": "404 not found",
        "kind": "not_found",
        "reason": None,
    }


@pytest.mark.parametrize(
    ("kind", "status_code"),
    [(RemoteErrorKind.SERVER_ERROR, 502), (RemoteErrorKind.TIMEOUT, 504)],
)
def test_remote_failures(client, remote, kind, status_code):
    """Test remote failure kinds map to distinct statuses."""
    remote.error = RemoteError(kind, "upstream trouble")

    response = client.get("/entities/7")

    assert response.status_code == status_code
    assert response.json()["detail"]["kind"] == kind.value


def test_invalidate(client, store):
    """Test DELETE drops the cached record."""
    client.get("/entities/7")

    response = client.delete("/entities/7")

    assert response.status_code == 200
    assert response.json() == {"success": True, "key": "entity:int:7"}
    assert store.get("entity:int:7") is None


def test_stats(client):
    """Test stats endpoint."""
    client.get("/entities/7")

    response = client.get("/stats")

    assert response.status_code == 200
    data = response.json()
    assert data["cache_mode"] == "keyed"
    assert data["total_entries"] == 1
    assert data["store"]["backend"] == "memory"


class ClosableClient:
    """Stand-in for an HTTP collaborator that records close()."""

    def __init__(self):
        self.closed = False

    async def close(self):
        self.closed = True


@pytest.mark.asyncio
async def test_lifespan_closes_clients_when_app_fails(monkeypatch):
    """Test that owned HTTP clients are closed even if the app exits with an error."""
    closable = ClosableClient()
    monkeypatch.setattr(dependencies, "build_repository", lambda: (make_repository(), [closable]))
    test_app = FastAPI()

    with pytest.raises(RuntimeError):
        async with dependencies.lifespan(test_app):
            assert test_app.state.entity_handler is not None
            raise RuntimeError("startup hook failed")

    assert closable.closed is True
    assert getattr(test_app.state, "entity_repository", None) is None
