"""Response DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field

from entity_cache.entities import EntityLookup


class EntityResponse(BaseModel):
    """Response DTO for an entity lookup."""

    id: int | str = Field(..., description="Entity identifier")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Contact address")
    source: str = Field(..., description="Where the entity came from: 'remote' or 'cache'")
    stale: bool = Field(
        False,
        description="True when a cached copy was served although the remote was reachable",
    )

    @classmethod
    def from_lookup(cls, lookup: EntityLookup) -> "EntityResponse":
        return cls(
            id=lookup.entity.id,
            name=lookup.entity.name,
            email=lookup.entity.email,
            source=lookup.source.value,
            stale=lookup.stale,
        )


class ErrorResponse(BaseModel):
    """Body of an error response.

    ``error`` is the stable error code (invalid_argument, remote_unavailable,
    cache_miss) so clients can render distinct states.
    """

    error: str = Field(..., description="Stable error code")
    message: str = Field(..., description="Human-readable detail")
    kind: str | None = Field(None, description="Remote failure kind, if any")
    reason: str | None = Field(None, description="Cache miss reason, if any")


class InvalidateResponse(BaseModel):
    """Response DTO for cache invalidation."""

    success: bool = Field(..., description="Whether a cached record was removed")
    key: str = Field(..., description="The cache key that was targeted")


class StatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    cache_mode: str = Field(..., description="'keyed' or 'single_slot'")
    key_prefix: str = Field(..., description="Prefix of all cache keys")
    total_entries: int = Field(..., description="Number of cached records", ge=0)
    serve_stale_on_error: bool = Field(..., description="Whether stale fallback is enabled")
    store: dict[str, Any] = Field(default_factory=dict, description="Backend-specific stats")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the cache backend is reachable")
    connected: bool = Field(..., description="Whether the remote source is reachable")
