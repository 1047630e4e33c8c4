"""HTTP handlers for entity operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, id parsing and error mapping.
"""

from fastapi import HTTPException, status

from entity_cache.dto import (
    EntityResponse,
    ErrorResponse,
    HealthCheckResponse,
    InvalidateResponse,
    StatsResponse,
)
from entity_cache.entities import EntityId, EntityLookup
from entity_cache.errors import (
    CacheMiss,
    EntityError,
    InvalidArgument,
    RemoteErrorKind,
    RemoteUnavailable,
)
from entity_cache.services import EntityRepository

REMOTE_STATUS = {
    RemoteErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    RemoteErrorKind.SERVER_ERROR: status.HTTP_502_BAD_GATEWAY,
    RemoteErrorKind.TIMEOUT: status.HTTP_504_GATEWAY_TIMEOUT,
}


def error_to_http(error: EntityError) -> HTTPException:
    """Map an error value to an HTTPException with an ErrorResponse body."""
    if isinstance(error, InvalidArgument):
        status_code = status.HTTP_400_BAD_REQUEST
        body = ErrorResponse(error=error.code, message=error.message)
    elif isinstance(error, RemoteUnavailable):
        status_code = REMOTE_STATUS[error.kind]
        body = ErrorResponse(error=error.code, message=error.message, kind=error.kind.value)
    elif isinstance(error, CacheMiss):
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        body = ErrorResponse(error=error.code, message=error.message, reason=error.reason)
    else:
        raise TypeError(f"Unexpected error value: {error!r}")

    return HTTPException(status_code=status_code, detail=body.model_dump())


class EntityHandler:
    """HTTP handlers for entity operations.

    This handler delegates business logic to EntityRepository
    and handles HTTP-specific concerns like:
    - Parsing path ids into the configured id type
    - Converting entities to DTOs
    - Mapping error values to status codes

    Example:
        ```python
        handler = EntityHandler(repository=repository, id_type="int")

        @app.get("/entities/{entity_id}", response_model=EntityResponse)
        async def get_entity(entity_id: str):
            return await handler.get_entity(entity_id)
        ```
    """

    def __init__(self, repository: EntityRepository, id_type: str = "int") -> None:
        """Initialize the entity handler.

        Args:
            repository: The entity repository (required).
            id_type: "int" or "str", how path ids are interpreted.
        """
        self._repository = repository
        self._id_type = id_type

    def parse_id(self, raw_id: str) -> EntityId | InvalidArgument:
        """Convert a path segment to an entity id.

        Args:
            raw_id: The raw path value

        Returns:
            The typed id, or InvalidArgument if it cannot be parsed
        """
        if self._id_type == "int":
            if not raw_id.isascii() or not raw_id.isdigit():
                return InvalidArgument(f"Entity id must be a positive integer, got {raw_id!r}")
            return int(raw_id)
        return raw_id

    async def get_entity(self, raw_id: str) -> EntityResponse:
        """Handle GET /entities/{entity_id} requests.

        Args:
            raw_id: The entity id from the path

        Returns:
            EntityResponse with the entity and its source

        Raises:
            HTTPException: 400, 404, 502, 503 or 504 depending on the failure
        """
        entity_id = self.parse_id(raw_id)
        if isinstance(entity_id, InvalidArgument):
            raise error_to_http(entity_id)

        result = await self._repository.lookup(entity_id)
        if not isinstance(result, EntityLookup):
            raise error_to_http(result)

        return EntityResponse.from_lookup(result)

    async def invalidate(self, raw_id: str) -> InvalidateResponse:
        """Handle DELETE /entities/{entity_id} requests.

        Raises:
            HTTPException: 400 for a bad id
        """
        entity_id = self.parse_id(raw_id)
        if isinstance(entity_id, InvalidArgument):
            raise error_to_http(entity_id)

        deleted = self._repository.invalidate(entity_id)
        if isinstance(deleted, InvalidArgument):
            raise error_to_http(deleted)

        return InvalidateResponse(success=deleted, key=self._repository.cache_key_for(entity_id))

    async def get_stats(self) -> StatsResponse:
        """Handle GET /stats requests."""
        stats = self._repository.get_stats()
        return StatsResponse(
            cache_mode=stats.pop("cache_mode"),
            key_prefix=stats.pop("key_prefix"),
            serve_stale_on_error=stats.pop("serve_stale_on_error"),
            total_entries=stats.get("total_entries", 0),
            store=stats,
        )

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        cache_healthy = await self._repository.is_healthy()
        connected = await self._repository.is_connected()

        return HealthCheckResponse(
            status="healthy" if cache_healthy else "unhealthy",
            cache_healthy=cache_healthy,
            connected=connected,
        )
