"""Connectivity oracle protocol."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ConnectivityChecker(Protocol):
    """Reports whether the remote catalog service is reachable.

    Read on every call by the offline decorator, so implementations must
    answer without performing I/O.
    """

    @property
    def is_connected(self) -> bool:
        """Return True if the network is currently considered available."""
        ...
