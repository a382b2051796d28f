"""HTTP API client protocol."""

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from layered_repository.clients.endpoints import Endpoint


@runtime_checkable
class APIClient(Protocol):
    """Sends an endpoint description and returns the decoded JSON body.

    Example:
        ```python
        client: APIClient = HttpxAPIClient.create()
        data = await client.request(ProductEndpoints.get_product("P1"))
        ```
    """

    async def request(self, endpoint: "Endpoint") -> Any:
        """Perform the request.

        Args:
            endpoint: Path, method, headers and optional JSON body

        Returns:
            The decoded JSON body, or None for an empty response

        Raises:
            TransportError: On timeout, network failure, non-2xx status or
                an undecodable body
        """
        ...
