"""ConnectivityProbe implementations.

HttpConnectivityProbe checks reachability with a HEAD request; any HTTP
response, whatever its status, counts as reachable. StaticConnectivityProbe
returns a fixed answer and backs the FORCE_OFFLINE setting and tests.
"""

import asyncio
import logging

import httpx

from entity_cache.config import settings

logger = logging.getLogger(__name__)


class HttpConnectivityProbe:
    """httpx-based implementation of the ConnectivityProbe protocol."""

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the probe.

        Args:
            url: URL to probe. Defaults to settings.probe_url.
            timeout: Upper bound for the whole check in seconds.
                Defaults to settings.probe_timeout.
            client: Preconfigured httpx.AsyncClient (mainly for tests).
        """
        self._url = url or settings.probe_url
        self._timeout = timeout or settings.probe_timeout
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    @classmethod
    def create(cls, url: str | None = None, timeout: float | None = None) -> "HttpConnectivityProbe":
        return cls(url=url, timeout=timeout)

    async def is_connected(self) -> bool:
        """Check whether the probe URL answers within the timeout.

        Returns:
            True if any HTTP response arrived, False on error or timeout
        """
        try:
            await asyncio.wait_for(self.client.head(self._url), timeout=self._timeout)
        except asyncio.TimeoutError:
            logger.info(f"Connectivity probe timed out after {self._timeout}s: {self._url}")
            return False
        except httpx.HTTPError as e:
            logger.info(f"Connectivity probe failed: {self._url}: {e}")
            return False
        return True

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


class StaticConnectivityProbe:
    """Probe with a fixed, settable answer."""

    def __init__(self, connected: bool = True) -> None:
        self._connected = connected

    def set_connected(self, connected: bool) -> None:
        self._connected = connected

    async def is_connected(self) -> bool:
        return self._connected
