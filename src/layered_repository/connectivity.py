"""Connectivity oracles for the offline decorator.

Both implementations answer ``is_connected`` from memory; the HTTP
monitor only performs I/O when ``probe()`` is awaited (typically from a
periodic background task owned by the application).
"""

import httpx
import structlog


class StaticConnectivity:
    """Connectivity flag set explicitly by the application.

    Example:
        ```python
        connectivity = StaticConnectivity()
        connectivity.set_connected(False)  # e.g. from an OS reachability callback
        ```
    """

    def __init__(self, connected: bool = True) -> None:
        self._connected = connected

    @property
    def is_connected(self) -> bool:
        return self._connected

    def set_connected(self, connected: bool) -> None:
        self._connected = connected


class HttpConnectivityMonitor:
    """Connectivity derived from probing a health URL over HTTP.

    Any 2xx response marks the network as available; a non-2xx response or
    any httpx error marks it unavailable. Until the first probe the
    monitor reports ``initial``.

    Example:
        ```python
        monitor = HttpConnectivityMonitor("https://api.example.com/health")
        await monitor.probe()
        monitor.is_connected
        ```
    """

    def __init__(
        self,
        probe_url: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 5.0,
        initial: bool = True,
    ) -> None:
        """Initialize the monitor.

        Args:
            probe_url: URL fetched with GET on every probe.
            client: httpx client to use. If None, one is created lazily.
            timeout: Probe timeout in seconds.
            initial: Value reported before the first probe completes.
        """
        self._probe_url = probe_url
        self._client = client
        self._timeout = timeout
        self._connected = initial
        self._logger = structlog.get_logger(__name__)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def probe(self) -> bool:
        """Probe the health URL and update the connectivity state.

        Returns:
            The new connectivity state
        """
        try:
            response = await self.client.get(self._probe_url)
            connected = response.is_success
        except httpx.HTTPError as e:
            self._logger.debug("connectivity.probe_failed", url=self._probe_url, error=str(e))
            connected = False

        if connected != self._connected:
            self._logger.info("connectivity.changed", connected=connected, url=self._probe_url)
        self._connected = connected
        return connected

    async def close(self) -> None:
        """Close the async HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
