"""
Tests for the entity record (serialization adapter) and id validation.
"""

import json

import pytest
from pydantic import ValidationError

from entity_cache.dto import EntityRecord, deserialize_entity, serialize_entity
from entity_cache.entities import Entity, validate_entity_id
from entity_cache.errors import InvalidArgument


@pytest.mark.parametrize(
    "entity",
    [
        Entity(id=7, name="Ada", email="ada@example.com"),
        Entity(id="7", name="Ada", email="ada@example.com"),
        Entity(id="user-42", name="Zoë Ñúñez 漢字", email="zoe+tag@mail.example.org"),
        Entity(id=2**40, name="", email="a@b.co"),
        Entity(id=3, name="Local", email="root@localhost"),
    ],
)
def test_round_trip_preserves_entity(entity):
    """Test that deserialize(serialize(e)) == e, id type included."""
    restored = deserialize_entity(serialize_entity(entity))

    assert restored == entity
    assert type(restored.id) is type(entity.id)


def test_serialized_record_is_flat_json():
    """Test the stored layout."""
    data = serialize_entity(Entity(id=7, name="Ada", email="ada@example.com"))

    assert json.loads(data) == {"id": 7, "name": "Ada", "email": "ada@example.com"}


def test_serialization_is_deterministic():
    """Test that the same entity always produces identical bytes."""
    entity = Entity(id=7, name="Ada", email="ada@example.com")

    assert serialize_entity(entity) == serialize_entity(Entity(**vars(entity)))


def test_remote_payload_extra_fields_ignored():
    """Test parsing a richer remote payload."""
    payload = {
        "id": 1,
        "name": "Leanne Graham",
        "username": "Bret",
        "email": "Sincere@april.biz",
        "address": {"city": "Gwenborough"},
    }

    record = EntityRecord.model_validate(payload)

    assert record.to_entity() == Entity(id=1, name="Leanne Graham", email="Sincere@april.biz")


@pytest.mark.parametrize(
    "raw",
    [
        b"",
        b"not json",
        b'{"id": 7, "name": "Ada"}',
        b'{"id": 7, "name": "Ada", "email": "not-an-email"}',
        b'{"id": 0, "name": "Ada", "email": "ada@example.com"}',
        b'{"id": 7.0, "name": "Ada", "email": "ada@example.com"}',
        b'{"id": true, "name": "Ada", "email": "ada@example.com"}',
    ],
)
def test_deserialize_rejects_malformed_records(raw):
    """Test that malformed records raise ValidationError."""
    with pytest.raises(ValidationError):
        deserialize_entity(raw)


def test_serialize_rejects_invalid_entity():
    """Test that an entity with a bad email cannot be stored."""
    with pytest.raises(ValueError):
        serialize_entity(Entity(id=7, name="Ada", email="nope"))


def test_entities_compare_structurally():
    """Test value equality and immutability."""
    a = Entity(id=7, name="Ada", email="ada@example.com")
    b = Entity(id=7, name="Ada", email="ada@example.com")

    assert a == b
    assert a != Entity(id=7, name="Ada L.", email="ada@example.com")
    with pytest.raises(AttributeError):
        a.name = "Other"  # type: ignore[misc]


class TestValidateEntityId:
    @pytest.mark.parametrize("entity_id", [1, 7, 2**63, "7", "user-42", "x" * 256])
    def test_valid(self, entity_id):
        assert validate_entity_id(entity_id) is None

    @pytest.mark.parametrize(
        "entity_id",
        [0, -1, False, True, "", "  ", "\t7", "7 ", "x" * 257, "a\x00b", None, 1.5, b"7", [7]],
    )
    def test_invalid(self, entity_id):
        assert isinstance(validate_entity_id(entity_id), InvalidArgument)
