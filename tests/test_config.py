"""
Tests for settings validation.
"""

import pytest

from entity_cache.config import Settings


def test_defaults_are_valid():
    """Test default settings."""
    settings = Settings(cache_mode="keyed", entity_id_type="int", log_level="INFO")

    assert settings.is_single_slot is False
    assert "{id}" in settings.remote_entity_path


def test_single_slot_mode():
    assert Settings(cache_mode="single_slot").is_single_slot is True


@pytest.mark.parametrize(
    "overrides",
    [
        {"cache_mode": "lru"},
        {"entity_id_type": "uuid"},
        {"log_level": "LOUD"},
        {"cache_ttl": -1},
        {"remote_timeout": 0},
        {"probe_timeout": -1.0},
        {"remote_entity_path": "/users"},
    ],
)
def test_invalid_settings_rejected(overrides):
    """Test that bad values fail at construction."""
    with pytest.raises(ValueError):
        Settings(**overrides)
