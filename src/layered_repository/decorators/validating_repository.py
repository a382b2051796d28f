"""Argument validation decorator."""

import math

from layered_repository.entities import ProductEntity
from layered_repository.exceptions import ValidationError, ValidationReason
from layered_repository.protocols import ProductRepository


class ValidatingProductRepository:
    """Rejects malformed arguments before the decoratee is ever called.

    Rules:
    - every product id must be non-blank
    - create/update: the name must be non-blank and the price a finite
      number >= 0

    Example:
        ```python
        repo = ValidatingProductRepository(RetryingProductRepository(remote))
        await repo.create(ProductEntity(id="P1", name="", price=1.0))  # ValidationError
        ```
    """

    def __init__(self, decoratee: ProductRepository) -> None:
        self._decoratee = decoratee

    async def get_one(self, product_id: str) -> ProductEntity:
        _validate_id(product_id)
        return await self._decoratee.get_one(product_id)

    async def get_all(self) -> list[ProductEntity]:
        return await self._decoratee.get_all()

    async def create(self, product: ProductEntity) -> None:
        _validate_product(product)
        await self._decoratee.create(product)

    async def update(self, product: ProductEntity) -> None:
        _validate_product(product)
        await self._decoratee.update(product)

    async def delete(self, product_id: str) -> None:
        _validate_id(product_id)
        await self._decoratee.delete(product_id)


def _validate_id(product_id: str) -> None:
    if not isinstance(product_id, str) or not product_id.strip():
        raise ValidationError(ValidationReason.INVALID_ID, f"Invalid product id: {product_id!r}")


def _validate_product(product: ProductEntity) -> None:
    _validate_id(product.id)

    if not isinstance(product.name, str) or not product.name.strip():
        raise ValidationError(ValidationReason.EMPTY_NAME, f"Product {product.id!r} has an empty name")

    price = product.price
    if isinstance(price, bool) or not isinstance(price, (int, float)) or not math.isfinite(price) or price < 0:
        raise ValidationError(
            ValidationReason.INVALID_PRICE,
            f"Product {product.id!r} has an invalid price: {price!r}",
        )
