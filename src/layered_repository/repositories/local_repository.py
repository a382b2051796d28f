"""Local implementation of ProductRepository over a ProductStore."""

import asyncio

from layered_repository.entities import ProductEntity
from layered_repository.exceptions import ConflictError, NotFoundError
from layered_repository.protocols import ProductStore


class LocalProductRepository:
    """Repository semantics (strict create, NotFound on missing keys) on top
    of a plain key-value store.

    Satisfies both ProductRepository and LocalRepository. Never performs
    network I/O itself; a Redis-backed store may still raise TransportError.

    Example:
        ```python
        local = LocalProductRepository(InMemoryProductStore())
        await local.create(ProductEntity(id="P1", name="Widget", price=9.99))
        ```
    """

    def __init__(self, store: ProductStore) -> None:
        """Initialize the local repository.

        Args:
            store: Storage backend holding the products.
        """
        self._store = store

    async def get_one(self, product_id: str) -> ProductEntity:
        product = await self._store.get(product_id)
        if product is None:
            raise NotFoundError(product_id)
        return product

    async def get_all(self) -> list[ProductEntity]:
        return await self._store.get_all()

    async def create(self, product: ProductEntity) -> None:
        if not await self._store.insert(product):
            raise ConflictError(product.id)

    async def update(self, product: ProductEntity) -> None:
        if not await self._store.replace(product):
            raise NotFoundError(product.id)

    async def delete(self, product_id: str) -> None:
        if not await self._store.delete(product_id):
            raise NotFoundError(product_id)

    async def save(self, product: ProductEntity) -> None:
        """Insert or replace a product."""
        await self._store.put(product)

    async def save_all(self, products: list[ProductEntity]) -> None:
        """Insert or replace several products concurrently.

        No ordering is guaranteed between the individual writes.
        """
        await asyncio.gather(*(self._store.put(product) for product in products))

    @property
    def store(self) -> ProductStore:
        """Get the underlying store (for testing)."""
        return self._store
