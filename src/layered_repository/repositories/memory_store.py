"""In-memory implementation of ProductStore."""

from layered_repository.entities import ProductEntity


class InMemoryProductStore:
    """Dictionary-backed product store.

    Entities are immutable, so values are shared without copying. No
    method awaits, so each one is atomic on the event loop.
    """

    def __init__(self, products: list[ProductEntity] | None = None) -> None:
        self._products: dict[str, ProductEntity] = {p.id: p for p in products or []}

    async def get(self, product_id: str) -> ProductEntity | None:
        return self._products.get(product_id)

    async def get_all(self) -> list[ProductEntity]:
        return list(self._products.values())

    async def put(self, product: ProductEntity) -> None:
        self._products[product.id] = product

    async def insert(self, product: ProductEntity) -> bool:
        if product.id in self._products:
            return False
        self._products[product.id] = product
        return True

    async def replace(self, product: ProductEntity) -> bool:
        if product.id not in self._products:
            return False
        self._products[product.id] = product
        return True

    async def delete(self, product_id: str) -> bool:
        return self._products.pop(product_id, None) is not None

    def __len__(self) -> int:
        return len(self._products)
