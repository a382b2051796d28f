"""
Tests for the validation decorator.
"""

import math

import pytest

from layered_repository.decorators import ValidatingProductRepository
from layered_repository.entities import ProductEntity
from layered_repository.exceptions import ValidationError, ValidationReason


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "product,reason",
    [
        (ProductEntity(id="", name="Widget", price=1.0), ValidationReason.INVALID_ID),
        (ProductEntity(id="   ", name="Widget", price=1.0), ValidationReason.INVALID_ID),
        (ProductEntity(id="P1", name="", price=1.0), ValidationReason.EMPTY_NAME),
        (ProductEntity(id="P1", name="  \t", price=1.0), ValidationReason.EMPTY_NAME),
        (ProductEntity(id="P1", name="Widget", price=-0.01), ValidationReason.INVALID_PRICE),
        (ProductEntity(id="P1", name="Widget", price=math.nan), ValidationReason.INVALID_PRICE),
        (ProductEntity(id="P1", name="Widget", price=math.inf), ValidationReason.INVALID_PRICE),
        (ProductEntity(id="P1", name="Widget", price=True), ValidationReason.INVALID_PRICE),
    ],
)
@pytest.mark.parametrize("operation", ["create", "update"])
async def test_invalid_products_never_reach_decoratee(remote, product, reason, operation):
    """Malformed writes are rejected with a reason and zero downstream calls."""
    repo = ValidatingProductRepository(remote)

    with pytest.raises(ValidationError) as exc_info:
        await getattr(repo, operation)(product)

    assert exc_info.value.reason is reason
    assert sum(remote.calls.values()) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("product_id", ["", " ", "\n"])
@pytest.mark.parametrize("operation", ["get_one", "delete"])
async def test_invalid_ids_never_reach_decoratee(remote, product_id, operation):
    repo = ValidatingProductRepository(remote)

    with pytest.raises(ValidationError) as exc_info:
        await getattr(repo, operation)(product_id)

    assert exc_info.value.reason is ValidationReason.INVALID_ID
    assert sum(remote.calls.values()) == 0


@pytest.mark.asyncio
async def test_valid_calls_are_delegated(remote, widget):
    """Zero price is allowed; valid arguments pass straight through."""
    repo = ValidatingProductRepository(remote)
    free = ProductEntity(id="P0", name="Sample", price=0)

    await repo.create(widget)
    await repo.create(free)
    await repo.update(widget)
    assert await repo.get_one("P1") == widget
    assert len(await repo.get_all()) == 2
    await repo.delete("P0")

    assert remote.calls == {"create": 2, "update": 1, "get_one": 1, "get_all": 1, "delete": 1}


def test_validation_error_message_names_the_product():
    error = ValidationError(ValidationReason.INVALID_PRICE, "Product 'P1' has an invalid price: -1")

    assert "P1" in str(error)
    assert ValidationError(ValidationReason.EMPTY_NAME).args == ("empty_name",)
