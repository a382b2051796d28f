"""Domain entities for internal representation.

These are pure dataclasses (frozen) passed between every layer of the
repository pipeline. They are NOT used for the wire format of the remote
catalog service - use DTOs from the dto package for that.
"""

from .product import ProductEntity, ProductPage

__all__ = ["ProductEntity", "ProductPage"]
