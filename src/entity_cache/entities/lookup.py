"""Lookup result entity."""

from dataclasses import dataclass
from enum import Enum

from .entity import Entity


class DataSource(str, Enum):
    """Where a returned entity came from."""

    REMOTE = "remote"
    CACHE = "cache"


@dataclass(frozen=True)
class EntityLookup:
    """An entity together with where it was served from.

    Attributes:
        entity: The served entity
        source: REMOTE for a fresh fetch, CACHE for a cached copy
        stale: True when the cache answered although the remote was reachable
    """

    entity: Entity
    source: DataSource
    stale: bool = False
