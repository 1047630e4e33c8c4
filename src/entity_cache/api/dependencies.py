"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from entity_cache.config import configure_logging, settings
from entity_cache.handlers import EntityHandler
from entity_cache.protocols import ConnectivityProbe
from entity_cache.repositories import (
    HttpConnectivityProbe,
    HttpRemoteSource,
    RedisCacheStore,
    StaticConnectivityProbe,
)
from entity_cache.services import EntityRepository

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> EntityHandler:
    """Dependency injection for EntityHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The EntityHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "entity_handler", None)
    if handler is None:
        raise RuntimeError("EntityHandler not initialized. Check lifespan setup.")
    return handler


def build_repository() -> tuple[EntityRepository, list]:
    """Build the default Redis + HTTP repository from settings.

    Returns:
        The repository and the closable HTTP collaborators it owns
    """
    remote_source = HttpRemoteSource.create()
    probe: ConnectivityProbe
    closables: list = [remote_source]
    if settings.force_offline:
        probe = StaticConnectivityProbe(connected=False)
    else:
        http_probe = HttpConnectivityProbe.create()
        closables.append(http_probe)
        probe = http_probe

    repository = EntityRepository.create(
        remote_source=remote_source,
        cache_store=RedisCacheStore.create(),
        connectivity_probe=probe,
    )
    return repository, closables


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Collaborators (remote source, cache store, probe) - created explicitly
    2. Repository (business logic) - stored in app.state.entity_repository
    3. Handler (HTTP endpoints) - stored in app.state.entity_handler

    A repository already placed on app.state (tests, embedding apps) is
    used as is.

    Args:
        app: The FastAPI application instance

    Yields:
        None
    """
    configure_logging()

    repository = getattr(app.state, "entity_repository", None)
    closables: list = []
    if repository is None:
        repository, closables = build_repository()

    app.state.entity_repository = repository
    app.state.entity_handler = EntityHandler(repository=repository, id_type=settings.entity_id_type)

    logger.info(
        f"Entity repository initialized (mode={repository.cache_mode}, "
        f"id_type={settings.entity_id_type}, force_offline={settings.force_offline})"
    )

    try:
        yield
    finally:
        for closable in closables:
            await closable.close()

        # Cleanup - remove from app.state
        del app.state.entity_handler
        del app.state.entity_repository
        logger.info("Entity repository shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[EntityHandler, Depends(get_handler)]
