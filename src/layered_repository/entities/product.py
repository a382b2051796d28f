"""Product domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProductEntity:
    """Domain entity for a catalog product.

    The id is the identity and never changes. Attribute changes produce a
    new instance via ``dataclasses.replace``. Business rules such as a
    non-negative price are enforced by the validating decorator, not here.

    Attributes:
        id: Unique product key
        name: Display name
        price: Unit price
    """

    id: str
    name: str
    price: float


@dataclass(frozen=True)
class ProductPage:
    """One page of a paginated product listing.

    Attributes:
        items: Products on this page, in service order
        page: 1-based page number that was requested
        page_size: Requested page size
        has_next_page: Whether a following page exists
    """

    items: list[ProductEntity]
    page: int
    page_size: int
    has_next_page: bool
