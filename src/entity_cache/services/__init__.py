"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from entity_cache.services import EntityRepository

    # Using factory method (recommended)
    repository = EntityRepository.create(
        remote_source=source,
        cache_store=store,
        connectivity_probe=probe,
    )

    # Or manual creation
    repository = EntityRepository(source, store, probe, cache_mode="single_slot")
    ```
"""

from .entity_repository import EntityRepository

__all__ = [
    "EntityRepository",
]
