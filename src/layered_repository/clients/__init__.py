"""HTTP client layer for the remote catalog service."""

from .endpoints import DEFAULT_HEADERS, Endpoint, HTTPMethod, ProductEndpoints
from .http_client import HttpxAPIClient

__all__ = [
    "DEFAULT_HEADERS",
    "Endpoint",
    "HTTPMethod",
    "HttpxAPIClient",
    "ProductEndpoints",
]
