"""Product repository protocol.

Defines the capability shared by every layer of the pipeline: the remote
and local leaves as well as each decorator wrapped around them.

Implementations include:
- RemoteProductRepository (catalog service over HTTP, also paginated)
- LocalProductRepository (in-memory or Redis store)
- Caching / Offline / Retrying / Validating / Logging / Metrics decorators
"""

from typing import Protocol, runtime_checkable

from layered_repository.entities import ProductEntity, ProductPage


@runtime_checkable
class ProductRepository(Protocol):
    """Protocol for product data access.

    Similar to Go's interface pattern - any type that implements these
    methods satisfies the protocol, no explicit inheritance needed. This is
    what lets decorators wrap each other in any order.

    Example:
        ```python
        from layered_repository.protocols import ProductRepository

        repo: ProductRepository = RemoteProductRepository(api_client)
        repo: ProductRepository = CachingProductRepository(repo)
        ```
    """

    async def get_one(self, product_id: str) -> ProductEntity:
        """Fetch a single product.

        Args:
            product_id: The product key

        Returns:
            The product

        Raises:
            NotFoundError: If no product has this id
            TransportError: If the underlying I/O failed
        """
        ...

    async def get_all(self) -> list[ProductEntity]:
        """Fetch a snapshot of all products.

        Returns:
            List of products (may be empty)

        Raises:
            TransportError: If the underlying I/O failed
        """
        ...

    async def create(self, product: ProductEntity) -> None:
        """Create a new product.

        Args:
            product: The product to create

        Raises:
            ConflictError: If a product with the same id exists
            TransportError: If the underlying I/O failed
        """
        ...

    async def update(self, product: ProductEntity) -> None:
        """Replace an existing product.

        Args:
            product: The new product state

        Raises:
            NotFoundError: If no product has this id
            TransportError: If the underlying I/O failed
        """
        ...

    async def delete(self, product_id: str) -> None:
        """Delete a product.

        Args:
            product_id: The product key

        Raises:
            NotFoundError: If no product has this id
            TransportError: If the underlying I/O failed
        """
        ...


@runtime_checkable
class LocalRepository(ProductRepository, Protocol):
    """A product repository that also accepts unconditional writes.

    Used by the offline decorator to mirror remote results locally
    regardless of whether the product already exists there.
    """

    async def save(self, product: ProductEntity) -> None:
        """Insert or replace a product."""
        ...

    async def save_all(self, products: list[ProductEntity]) -> None:
        """Insert or replace several products."""
        ...


@runtime_checkable
class PaginatedProductRepository(ProductRepository, Protocol):
    """A product repository that can also list products one page at a time."""

    async def get_page(self, page: int, page_size: int) -> ProductPage:
        """Fetch one page of products.

        Args:
            page: 1-based page number
            page_size: Number of products per page

        Returns:
            The page, with ``has_next_page`` set by the data source

        Raises:
            ValidationError: If page or page_size is out of range
            TransportError: If the underlying I/O failed
        """
        ...
