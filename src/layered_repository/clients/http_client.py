"""httpx-based implementation of the APIClient protocol.

Translates every httpx failure into TransportError so that no raw
transport exception leaks into the repository pipeline.
"""

from typing import Any

import httpx

from layered_repository.clients.endpoints import Endpoint
from layered_repository.config import Settings, get_settings
from layered_repository.exceptions import TransportError


class HttpxAPIClient:
    """Async HTTP client for the catalog service.

    This class satisfies the APIClient protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        async with HttpxAPIClient.create() as client:
            data = await client.request(ProductEndpoints.get_all_products())
        ```
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the API client.

        Args:
            base_url: Catalog service base URL.
            timeout: Request timeout in seconds.
            client: Preconfigured httpx client. If None, one is created lazily.
        """
        self._base_url = base_url
        self._timeout = timeout
        self._client = client

    @classmethod
    def create(cls, settings: Settings | None = None) -> "HttpxAPIClient":
        """Factory method to create HttpxAPIClient from settings.

        Args:
            settings: Application settings. If None, uses get_settings().

        Returns:
            Configured HttpxAPIClient
        """
        settings = settings or get_settings()
        return cls(base_url=settings.api_base_url, timeout=settings.api_timeout)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    async def request(self, endpoint: Endpoint) -> Any:
        """Send the endpoint and decode the JSON response.

        Args:
            endpoint: The request description

        Returns:
            The decoded JSON body, or None when the body is empty

        Raises:
            TransportError: On timeout, network failure, non-2xx status or
                an undecodable body
        """
        try:
            response = await self.client.request(
                endpoint.method.value,
                endpoint.path,
                headers=endpoint.headers,
                json=endpoint.body,
                params=endpoint.params,
            )
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timed out: {endpoint.method.value} {endpoint.path}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request failed: {endpoint.method.value} {endpoint.path}: {e}") from e

        if not response.is_success:
            raise TransportError(
                f"HTTP {response.status_code} for {endpoint.method.value} {endpoint.path}",
                status_code=response.status_code,
            )

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON from {endpoint.path}") from e

    async def close(self) -> None:
        """Close the async HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpxAPIClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
