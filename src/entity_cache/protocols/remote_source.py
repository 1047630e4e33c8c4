"""Remote source protocol.

Defines the interface for the authoritative source that entities are
fetched from over the network.

Implementations can include:
- HTTP/JSON API (default, httpx)
- gRPC or GraphQL clients
- Fakes for testing
"""

from typing import Protocol, runtime_checkable

from entity_cache.entities import Entity, EntityId
from entity_cache.errors import RemoteError


@runtime_checkable
class RemoteSource(Protocol):
    """Protocol for remote entity sources.

    Fetches must be idempotent reads with no server-side effect. Every
    non-success response or transport failure is mapped to a RemoteError
    of kind NOT_FOUND, SERVER_ERROR or TIMEOUT.
    """

    async def fetch(self, entity_id: EntityId) -> Entity | RemoteError:
        """Fetch an entity by identifier.

        Args:
            entity_id: The entity identifier

        Returns:
            The fetched Entity, or a RemoteError describing the failure
        """
        ...
