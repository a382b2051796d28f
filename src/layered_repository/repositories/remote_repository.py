"""Remote implementation of ProductRepository.

Talks to the catalog service through an APIClient. HTTP 404 and 409
responses become NotFoundError and ConflictError; every other failure
stays a TransportError. Also satisfies PaginatedProductRepository
(`GET /products?page=&per_page=`).
"""

from typing import Any

from pydantic import ValidationError as PayloadValidationError

from layered_repository.clients.endpoints import ProductEndpoints
from layered_repository.dto import ProductPagePayload, ProductPayload
from layered_repository.entities import ProductEntity, ProductPage
from layered_repository.exceptions import (
    ConflictError,
    NotFoundError,
    TransportError,
    ValidationError,
    ValidationReason,
)
from layered_repository.protocols import APIClient

HTTP_NOT_FOUND = 404
HTTP_CONFLICT = 409

MAX_PAGE_SIZE = 100


class RemoteProductRepository:
    """Catalog service implementation of the ProductRepository protocol.

    Example:
        ```python
        remote = RemoteProductRepository(HttpxAPIClient.create())
        product = await remote.get_one("P1")
        ```
    """

    def __init__(self, api_client: APIClient) -> None:
        """Initialize the remote repository.

        Args:
            api_client: Client used to reach the catalog service.
        """
        self._api = api_client

    async def get_one(self, product_id: str) -> ProductEntity:
        try:
            data = await self._api.request(ProductEndpoints.get_product(product_id))
        except TransportError as e:
            if e.status_code == HTTP_NOT_FOUND:
                raise NotFoundError(product_id) from e
            raise
        return _decode_product(data)

    async def get_all(self) -> list[ProductEntity]:
        data = await self._api.request(ProductEndpoints.get_all_products())
        if data is None:
            return []
        if not isinstance(data, list):
            raise TransportError(f"Expected a list of products, got {type(data).__name__}")
        return [_decode_product(item) for item in data]

    async def get_page(self, page: int, page_size: int) -> ProductPage:
        """Fetch one page of products.

        Args:
            page: 1-based page number
            page_size: Products per page, between 1 and MAX_PAGE_SIZE

        Returns:
            The decoded page

        Raises:
            ValidationError: If page or page_size is out of range (no request is sent)
            TransportError: On I/O failure or a body without the page shape
        """
        _validate_page(page, page_size)
        data = await self._api.request(ProductEndpoints.get_products_page(page, page_size))
        try:
            return ProductPagePayload.model_validate(data).to_entity(page, page_size)
        except PayloadValidationError as e:
            raise TransportError(f"Malformed product page: {e.error_count()} error(s)") from e

    async def create(self, product: ProductEntity) -> None:
        body = ProductPayload.from_entity(product).model_dump()
        try:
            await self._api.request(ProductEndpoints.create_product(body))
        except TransportError as e:
            if e.status_code == HTTP_CONFLICT:
                raise ConflictError(product.id) from e
            raise

    async def update(self, product: ProductEntity) -> None:
        body = ProductPayload.from_entity(product).model_dump()
        try:
            await self._api.request(ProductEndpoints.update_product(product.id, body))
        except TransportError as e:
            if e.status_code == HTTP_NOT_FOUND:
                raise NotFoundError(product.id) from e
            raise

    async def delete(self, product_id: str) -> None:
        try:
            await self._api.request(ProductEndpoints.delete_product(product_id))
        except TransportError as e:
            if e.status_code == HTTP_NOT_FOUND:
                raise NotFoundError(product_id) from e
            raise


def _validate_page(page: int, page_size: int) -> None:
    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise ValidationError(ValidationReason.INVALID_PAGE, f"Page must be an integer >= 1, got {page!r}")
    if isinstance(page_size, bool) or not isinstance(page_size, int) or not 1 <= page_size <= MAX_PAGE_SIZE:
        raise ValidationError(
            ValidationReason.INVALID_PAGE,
            f"Page size must be an integer between 1 and {MAX_PAGE_SIZE}, got {page_size!r}",
        )


def _decode_product(data: Any) -> ProductEntity:
    """Decode one product from a JSON value.

    Raises:
        TransportError: If the value does not have the product shape
    """
    try:
        return ProductPayload.model_validate(data).to_entity()
    except PayloadValidationError as e:
        raise TransportError(f"Malformed product payload: {e.error_count()} error(s)") from e
