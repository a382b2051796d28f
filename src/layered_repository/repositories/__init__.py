"""Repository layer: the leaves of the pipeline.

This layer abstracts external dependencies (catalog HTTP service, Redis)
behind protocol-based interfaces. This enables:
- Wrapping any leaf with any decorator
- Unit testing with in-memory implementations
- Swapping the local store without touching the pipeline

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from layered_repository.protocols import LocalRepository, ProductRepository, ProductStore

from .local_repository import LocalProductRepository
from .memory_store import InMemoryProductStore
from .redis_store import RedisProductStore
from .remote_repository import RemoteProductRepository

__all__ = [
    "InMemoryProductStore",
    "LocalProductRepository",
    "LocalRepository",
    "ProductRepository",
    "ProductStore",
    "RedisProductStore",
    "RemoteProductRepository",
]
