"""Entity domain value."""

from dataclasses import dataclass

from entity_cache.errors import InvalidArgument

MAX_STR_ID_LENGTH = 256

EntityId = int | str


@dataclass(frozen=True)
class Entity:
    """Domain entity served by the repository.

    Identity is ``id``; equality is structural. Instances are never mutated,
    an update is a new Entity.

    Attributes:
        id: Unique identifier (positive int or non-empty string)
        name: Display name
        email: Contact address
    """

    id: EntityId
    name: str
    email: str


def validate_entity_id(entity_id: object) -> InvalidArgument | None:
    """Check that a value is usable as an entity key.

    Args:
        entity_id: The candidate identifier

    Returns:
        InvalidArgument describing the problem, or None if the id is valid
    """
    # bool is an int subclass but never a valid key
    if isinstance(entity_id, bool):
        return InvalidArgument(f"Entity id must be int or str, got bool {entity_id!r}")

    if isinstance(entity_id, int):
        if entity_id < 1:
            return InvalidArgument(f"Entity id must be a positive integer, got {entity_id}")
        return None

    if isinstance(entity_id, str):
        if not entity_id.strip():
            return InvalidArgument("Entity id must not be empty")
        if entity_id != entity_id.strip():
            return InvalidArgument(f"Entity id must not have surrounding whitespace: {entity_id!r}")
        if len(entity_id) > MAX_STR_ID_LENGTH:
            return InvalidArgument(f"Entity id longer than {MAX_STR_ID_LENGTH} characters")
        if any(not ch.isprintable() for ch in entity_id):
            return InvalidArgument(f"Entity id contains control characters: {entity_id!r}")
        return None

    return InvalidArgument(f"Entity id must be int or str, got {type(entity_id).__name__}")
