"""Storage/wire record for entities.

EntityRecord is the serialization adapter between the plain Entity value and
its JSON representation, used both for cache records and for parsing remote
payloads. Entity itself stays free of serialization logic.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator

from entity_cache.entities import Entity, validate_entity_id

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+$"


class EntityRecord(BaseModel):
    """Flat record with identifier, name and contact address.

    Strict id types keep ``7`` and ``"7"`` distinct through a round trip.
    Unknown fields (extra attributes in remote payloads) are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: StrictInt | StrictStr = Field(..., description="Entity identifier")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Contact address", pattern=EMAIL_PATTERN)

    @field_validator("id")
    @classmethod
    def _check_id(cls, value: int | str) -> int | str:
        error = validate_entity_id(value)
        if error is not None:
            raise ValueError(error.message)
        return value

    @classmethod
    def from_entity(cls, entity: Entity) -> "EntityRecord":
        return cls(id=entity.id, name=entity.name, email=entity.email)

    def to_entity(self) -> Entity:
        return Entity(id=self.id, name=self.name, email=self.email)


def serialize_entity(entity: Entity) -> bytes:
    """Serialize an entity to compact JSON bytes.

    The output is deterministic, so writing the same entity twice produces
    byte-identical records.

    Args:
        entity: The entity to serialize

    Returns:
        UTF-8 encoded JSON

    Raises:
        pydantic.ValidationError: If the entity is not valid
    """
    return EntityRecord.from_entity(entity).model_dump_json().encode("utf-8")


def deserialize_entity(data: bytes | str) -> Entity:
    """Rebuild an entity from bytes produced by serialize_entity.

    Args:
        data: JSON bytes (or text)

    Returns:
        The reconstructed Entity

    Raises:
        pydantic.ValidationError: If the data is malformed
    """
    return EntityRecord.model_validate_json(data).to_entity()
