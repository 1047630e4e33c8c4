"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for storage or API contracts - use
the records and DTOs from the dto package for that.

Entities should have:
- No JSON serialization logic
- No Pydantic validation
- No external dependencies
- Pure domain logic only
"""

from .entity import Entity, EntityId, validate_entity_id
from .lookup import DataSource, EntityLookup

__all__ = ["DataSource", "Entity", "EntityId", "EntityLookup", "validate_entity_id"]
