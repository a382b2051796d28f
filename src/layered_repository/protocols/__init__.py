"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Decorators that wrap any repository, in any order
- Unit testing with recording test doubles
- Swapping the local store (memory -> Redis) or the metrics sink

Usage:
    ```python
    from layered_repository.protocols import ProductRepository

    repo: ProductRepository = RemoteProductRepository(api_client)  # works
    repo: ProductRepository = CachingProductRepository(repo)       # also works
    ```
"""

from .api_client import APIClient
from .connectivity import ConnectivityChecker
from .metrics_recorder import MetricsRecorder
from .product_store import ProductStore
from .repository import LocalRepository, PaginatedProductRepository, ProductRepository

__all__ = [
    "APIClient",
    "ConnectivityChecker",
    "LocalRepository",
    "MetricsRecorder",
    "PaginatedProductRepository",
    "ProductRepository",
    "ProductStore",
]
