"""Repository decorators.

Each decorator wraps exactly one ProductRepository (its decoratee), adds a
single cross-cutting concern and exposes the same protocol again, so the
decorators can be stacked in any order. The recommended order, outermost
first, is:

    Metrics -> Logging -> Validating -> Retrying -> Offline -> Caching -> Remote

See ``layered_repository.pipeline.build_pipeline``.
"""

from .caching_repository import CachingProductRepository
from .logging_repository import LoggingProductRepository
from .metrics_repository import MetricsProductRepository
from .offline_repository import OfflineProductRepository
from .retrying_repository import RetryingProductRepository
from .validating_repository import ValidatingProductRepository

__all__ = [
    "CachingProductRepository",
    "LoggingProductRepository",
    "MetricsProductRepository",
    "OfflineProductRepository",
    "RetryingProductRepository",
    "ValidatingProductRepository",
]
