"""Layered Repository - composable, resilient data access for a product catalog.

This package provides a repository pipeline: leaves that reach the data
(remote catalog service, local store) wrapped by decorators that each add
one cross-cutting concern while keeping the same interface.

Layers:
    - protocols: Interface contracts (ProductRepository, ProductStore, ...)
    - repositories: Leaves (remote HTTP, local memory/Redis)
    - decorators: Caching, offline, retry, validation, logging, metrics
    - services: Orchestration across repositories (sync)
    - clients: HTTP client for the catalog service
    - dto: Wire format (Pydantic)
    - entities: Domain models (internal)

Usage:
    ```python
    from layered_repository import RepositoryFactory

    factory = RepositoryFactory.create()
    repository = factory.make_product_repository()
    product = await repository.get_one("P1")
    ```

Or compose by hand:
    ```python
    from layered_repository import build_pipeline

    repository = build_pipeline(remote, local, connectivity, metrics=recorder)
    ```
"""

from layered_repository.clients import HttpxAPIClient
from layered_repository.config import Settings, get_settings
from layered_repository.connectivity import HttpConnectivityMonitor, StaticConnectivity
from layered_repository.decorators import (
    CachingProductRepository,
    LoggingProductRepository,
    MetricsProductRepository,
    OfflineProductRepository,
    RetryingProductRepository,
    ValidatingProductRepository,
)
from layered_repository.entities import ProductEntity, ProductPage
from layered_repository.exceptions import (
    ConflictError,
    NotFoundError,
    RepositoryError,
    TransportError,
    ValidationError,
    ValidationReason,
)
from layered_repository.logging_config import configure_logging
from layered_repository.metrics import PrometheusMetricsRecorder
from layered_repository.pipeline import RepositoryFactory, build_pipeline
from layered_repository.protocols import (
    ConnectivityChecker,
    LocalRepository,
    MetricsRecorder,
    PaginatedProductRepository,
    ProductRepository,
    ProductStore,
)
from layered_repository.repositories import (
    InMemoryProductStore,
    LocalProductRepository,
    RedisProductStore,
    RemoteProductRepository,
)
from layered_repository.services import SyncReport, SyncService

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    "configure_logging",
    # Protocols (interfaces)
    "ProductRepository",
    "LocalRepository",
    "PaginatedProductRepository",
    "ProductStore",
    "ConnectivityChecker",
    "MetricsRecorder",
    # Leaves
    "RemoteProductRepository",
    "LocalProductRepository",
    "InMemoryProductStore",
    "RedisProductStore",
    # Decorators
    "CachingProductRepository",
    "OfflineProductRepository",
    "RetryingProductRepository",
    "ValidatingProductRepository",
    "LoggingProductRepository",
    "MetricsProductRepository",
    # Composition
    "build_pipeline",
    "RepositoryFactory",
    # Collaborators
    "HttpxAPIClient",
    "StaticConnectivity",
    "HttpConnectivityMonitor",
    "PrometheusMetricsRecorder",
    "SyncService",
    "SyncReport",
    # Entities
    "ProductEntity",
    "ProductPage",
    # Errors
    "RepositoryError",
    "NotFoundError",
    "ConflictError",
    "ValidationError",
    "ValidationReason",
    "TransportError",
]
