"""Product payload DTO."""

from pydantic import BaseModel, Field

from layered_repository.entities import ProductEntity, ProductPage


class ProductPayload(BaseModel):
    """Wire representation of a product.

    Only the shape is checked here. An empty name or a negative price
    still decodes; those rules belong to ValidatingProductRepository.
    """

    id: str = Field(..., description="Unique product key")
    name: str = Field(..., description="Display name")
    price: float = Field(..., description="Unit price")

    model_config = {"extra": "ignore"}

    @classmethod
    def from_entity(cls, product: ProductEntity) -> "ProductPayload":
        """Build a payload from a domain entity."""
        return cls(id=product.id, name=product.name, price=product.price)

    def to_entity(self) -> ProductEntity:
        """Convert to the domain entity."""
        return ProductEntity(id=self.id, name=self.name, price=self.price)


class ProductPagePayload(BaseModel):
    """Wire representation of one page of ``GET /products?page=&per_page=``."""

    items: list[ProductPayload] = Field(default_factory=list, description="Products on this page")
    has_next_page: bool = Field(..., description="Whether a following page exists")

    model_config = {"extra": "ignore"}

    def to_entity(self, page: int, page_size: int) -> ProductPage:
        """Convert to the domain entity."""
        return ProductPage(
            items=[item.to_entity() for item in self.items],
            page=page,
            page_size=page_size,
            has_next_page=self.has_next_page,
        )
