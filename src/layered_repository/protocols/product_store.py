"""Product storage protocol.

Defines the key-value interface a local store must offer. The store has
no notion of conflicts or missing keys as errors; LocalProductRepository
builds those semantics on top. The conditional writes (insert, replace,
delete) must each be a single atomic step in the backend, so concurrent
callers cannot both win.

Implementations can include:
- In-memory dictionary (default)
- Redis hash
- Any other durable key-value storage
"""

from typing import Protocol, runtime_checkable

from layered_repository.entities import ProductEntity


@runtime_checkable
class ProductStore(Protocol):
    """Protocol for local product storage backends."""

    async def get(self, product_id: str) -> ProductEntity | None:
        """Return the stored product or None."""
        ...

    async def get_all(self) -> list[ProductEntity]:
        """Return every stored product."""
        ...

    async def put(self, product: ProductEntity) -> None:
        """Insert or replace a product."""
        ...

    async def insert(self, product: ProductEntity) -> bool:
        """Store a product only if its id is absent, atomically.

        Returns:
            True if stored, False if a product with this id already existed
        """
        ...

    async def replace(self, product: ProductEntity) -> bool:
        """Overwrite a product only if its id is present, atomically.

        Returns:
            True if replaced, False if no product with this id was stored
        """
        ...

    async def delete(self, product_id: str) -> bool:
        """Remove a product.

        Returns:
            True if a product was removed, False if none was stored
        """
        ...
