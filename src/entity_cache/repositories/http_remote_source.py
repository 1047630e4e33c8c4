"""HTTP implementation of RemoteSource.

Fetches entities from a JSON API with httpx. The default configuration
targets a JSONPlaceholder-style ``/users/{id}`` endpoint that returns an
object with at least ``id``, ``name`` and ``email``.

Failure mapping:
- 404 -> NOT_FOUND
- any other non-2xx status -> SERVER_ERROR
- httpx timeout -> TIMEOUT
- other transport errors, invalid JSON or an invalid record -> SERVER_ERROR
"""

import logging
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from entity_cache.config import settings
from entity_cache.dto import EntityRecord
from entity_cache.entities import Entity, EntityId
from entity_cache.errors import RemoteError, RemoteErrorKind

logger = logging.getLogger(__name__)


class HttpRemoteSource:
    """httpx-based implementation of the RemoteSource protocol.

    This class satisfies the RemoteSource protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        source = HttpRemoteSource.create(base_url="https://api.example.com")

        result = await source.fetch(7)
        if isinstance(result, RemoteError):
            print(result.kind)
        ```
    """

    def __init__(
        self,
        base_url: str | None = None,
        entity_path: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the HTTP remote source.

        Args:
            base_url: API base URL. Defaults to settings.remote_base_url.
            entity_path: Path template with an ``{id}`` placeholder.
                Defaults to settings.remote_entity_path.
            timeout: Request timeout in seconds. Defaults to settings.remote_timeout.
            client: Preconfigured httpx.AsyncClient (mainly for tests).
        """
        self._base_url = (base_url or settings.remote_base_url).rstrip("/")
        self._entity_path = entity_path or settings.remote_entity_path
        self._timeout = timeout or settings.remote_timeout
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @classmethod
    def create(
        cls,
        base_url: str | None = None,
        entity_path: str | None = None,
    ) -> "HttpRemoteSource":
        """Factory method to create HttpRemoteSource with defaults.

        Args:
            base_url: API base URL. If None, uses settings.
            entity_path: Path template. If None, uses settings.

        Returns:
            Configured HttpRemoteSource
        """
        return cls(base_url=base_url, entity_path=entity_path)

    def url_for(self, entity_id: EntityId) -> str:
        """Build the request URL for an entity id."""
        path = self._entity_path.format(id=quote(str(entity_id), safe=""))
        return f"{self._base_url}{path}"

    async def fetch(self, entity_id: EntityId) -> Entity | RemoteError:
        """Fetch an entity by identifier.

        Args:
            entity_id: The entity identifier

        Returns:
            The fetched Entity, or a RemoteError
        """
        url = self.url_for(entity_id)

        try:
            response = await self.client.get(url, headers={"Accept": "application/json"})
        except httpx.TimeoutException as e:
            logger.warning(f"Remote fetch timed out: {url}")
            return RemoteError(RemoteErrorKind.TIMEOUT, f"Request timed out: {e}")
        except httpx.HTTPError as e:
            logger.warning(f"Remote fetch failed: {url}: {e}")
            return RemoteError(RemoteErrorKind.SERVER_ERROR, f"Transport error: {e}")

        if response.status_code == httpx.codes.NOT_FOUND:
            return RemoteError(RemoteErrorKind.NOT_FOUND, f"Entity {entity_id!r} not found")

        if not response.is_success:
            return RemoteError(
                RemoteErrorKind.SERVER_ERROR,
                f"Remote returned HTTP {response.status_code}",
            )

        try:
            record = EntityRecord.model_validate_json(response.content)
        except ValidationError as e:
            logger.warning(f"Invalid entity payload from {url}: {e}")
            return RemoteError(RemoteErrorKind.SERVER_ERROR, "Invalid entity payload")

        if str(record.id) != str(entity_id):
            return RemoteError(
                RemoteErrorKind.SERVER_ERROR,
                f"Remote returned entity {record.id!r} for id {entity_id!r}",
            )

        # Keep the caller's id type (the API may return 7 for "7")
        return Entity(id=entity_id, name=record.name, email=record.email)

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
