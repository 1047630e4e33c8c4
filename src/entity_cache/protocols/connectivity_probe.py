"""Connectivity probe protocol."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ConnectivityProbe(Protocol):
    """Protocol for network reachability checks.

    A probe may perform a lightweight network call but must resolve within a
    bounded time; a probe that times out reports False.
    """

    async def is_connected(self) -> bool:
        """Report whether the remote source is currently reachable.

        Returns:
            True if reachable, False otherwise
        """
        ...
