from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from entity_cache.api.dependencies import HandlerDep, lifespan
from entity_cache.config import settings
from entity_cache.dto import (
    EntityResponse,
    HealthCheckResponse,
    InvalidateResponse,
    StatsResponse,
)

app = FastAPI(
    title="Entity Cache API",
    description="Read-through entity cache with offline fallback, using Redis and httpx",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Entity Cache API",
        "version": "0.1.0",
        "description": "Read-through entity cache with offline fallback, using Redis and httpx",
        "endpoints": {
            "entities": "/entities/{entity_id}",
            "stats": "/stats",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check()


@app.get("/stats", response_model=StatsResponse)
async def stats(handler: HandlerDep) -> StatsResponse:
    """Cache statistics endpoint."""
    return await handler.get_stats()


@app.get("/entities/{entity_id}", response_model=EntityResponse)
async def get_entity(entity_id: str, handler: HandlerDep) -> EntityResponse:
    """
    Get an entity, fresh from the remote when online, cached when offline.

    Args:
        entity_id: The entity identifier.

    Returns:
        The entity with its source ("remote" or "cache").
    """
    return await handler.get_entity(entity_id)


@app.delete("/entities/{entity_id}", response_model=InvalidateResponse)
async def invalidate_entity(entity_id: str, handler: HandlerDep) -> InvalidateResponse:
    """Drop the cached record for an entity."""
    return await handler.invalidate(entity_id)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "entity_cache.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
