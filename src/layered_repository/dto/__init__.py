"""Data Transfer Objects for the catalog service contract.

These Pydantic models define the JSON shape exchanged with the remote
catalog service and stored in Redis. Internal logic should use entities
from the entities package.
"""

from .product import ProductPagePayload, ProductPayload

__all__ = ["ProductPagePayload", "ProductPayload"]
