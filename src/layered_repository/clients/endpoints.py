"""Catalog service endpoint definitions."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from urllib.parse import quote

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class HTTPMethod(str, Enum):
    """HTTP methods used by the catalog service."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass(frozen=True)
class Endpoint:
    """A request description, independent of the HTTP library.

    Attributes:
        path: Path relative to the service base URL
        method: HTTP method
        headers: Request headers
        body: JSON-serializable request body, if any
        params: Query string parameters, if any
    """

    path: str
    method: HTTPMethod = HTTPMethod.GET
    headers: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))
    body: Any = None
    params: dict[str, Any] | None = None


def _product_path(product_id: str) -> str:
    return f"/products/{quote(product_id, safe='')}"


class ProductEndpoints:
    """Factory for product endpoints."""

    @staticmethod
    def get_product(product_id: str) -> Endpoint:
        return Endpoint(path=_product_path(product_id))

    @staticmethod
    def get_all_products() -> Endpoint:
        return Endpoint(path="/products")

    @staticmethod
    def get_products_page(page: int, per_page: int) -> Endpoint:
        return Endpoint(path="/products", params={"page": page, "per_page": per_page})

    @staticmethod
    def create_product(body: dict[str, Any]) -> Endpoint:
        return Endpoint(path="/products", method=HTTPMethod.POST, body=body)

    @staticmethod
    def update_product(product_id: str, body: dict[str, Any]) -> Endpoint:
        return Endpoint(path=_product_path(product_id), method=HTTPMethod.PUT, body=body)

    @staticmethod
    def delete_product(product_id: str) -> Endpoint:
        return Endpoint(path=_product_path(product_id), method=HTTPMethod.DELETE)
