"""Data Transfer Objects for storage and API contracts.

These Pydantic models define the external contracts: the serialized cache
record and the HTTP responses.

Internal domain logic should use entities from the entities package.
"""

from .records import EntityRecord, deserialize_entity, serialize_entity
from .responses import (
    EntityResponse,
    ErrorResponse,
    HealthCheckResponse,
    InvalidateResponse,
    StatsResponse,
)

__all__ = [
    "EntityRecord",
    "serialize_entity",
    "deserialize_entity",
    "EntityResponse",
    "ErrorResponse",
    "HealthCheckResponse",
    "InvalidateResponse",
    "StatsResponse",
]
