"""Pipeline composition.

The canonical stack, outermost first:

    Metrics(Logging(Validating(Retrying(Offline(Caching(remote), local, connectivity)))))

Validation runs before any network or retry cost is paid; logging and
metrics wrap everything so their durations include retries and fallbacks.
"""

import asyncio
from collections.abc import Awaitable, Callable

from structlog.typing import BindableLogger
from tenacity import wait_exponential
from tenacity.wait import wait_base

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
from layered_repository.decorators.retrying_repository import DEFAULT_MAX_ATTEMPTS
from layered_repository.metrics import PrometheusMetricsRecorder
from layered_repository.protocols import (
    ConnectivityChecker,
    LocalRepository,
    MetricsRecorder,
    ProductRepository,
    ProductStore,
)
from layered_repository.repositories import (
    InMemoryProductStore,
    LocalProductRepository,
    RedisProductStore,
    RemoteProductRepository,
)
from layered_repository.services import SyncService


def build_pipeline(
    remote: ProductRepository,
    local: LocalRepository,
    connectivity: ConnectivityChecker,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    wait: wait_base | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    cache_ttl: float | None = None,
    cache_max_size: int | None = None,
    fallback_on_error: bool = True,
    logger: BindableLogger | None = None,
    metrics: MetricsRecorder | None = None,
) -> ProductRepository:
    """Wrap the leaves in the canonical decorator order.

    Args:
        remote: Remote leaf (catalog service).
        local: Local leaf used offline and as write-back target.
        connectivity: Oracle read on every call by the offline layer.
        max_attempts: Total attempts of the retry layer.
        wait: tenacity wait strategy for the retry layer.
        sleep: Coroutine used by the retry layer to wait.
        cache_ttl: Cache entry lifetime in seconds (None = no expiry).
        cache_max_size: Maximum cached entries (None = unbounded).
        fallback_on_error: Serve reads locally when the remote fails.
        logger: structlog logger shared by the logging, retry and offline layers.
        metrics: Metrics sink. When None the metrics layer is omitted.

    Returns:
        A single ProductRepository exposing the whole stack
    """
    repository: ProductRepository = CachingProductRepository(
        remote, ttl=cache_ttl, max_size=cache_max_size
    )
    repository = OfflineProductRepository(
        repository,
        local=local,
        connectivity=connectivity,
        fallback_on_error=fallback_on_error,
        logger=logger,
    )
    repository = RetryingProductRepository(
        repository, max_attempts=max_attempts, wait=wait, sleep=sleep, logger=logger
    )
    repository = ValidatingProductRepository(repository)
    repository = LoggingProductRepository(repository, logger=logger)
    if metrics is not None:
        repository = MetricsProductRepository(repository, metrics)
    return repository


class RepositoryFactory:
    """Builds leaves and pipelines from Settings.

    An ordinary object owning the HTTP client and the local store it
    creates; call ``aclose()`` when done.

    Example:
        ```python
        factory = RepositoryFactory.create()
        repository = factory.make_product_repository()
        products = await repository.get_all()
        await factory.aclose()
        ```
    """

    def __init__(
        self,
        settings: Settings,
        api_client: HttpxAPIClient | None = None,
        store: ProductStore | None = None,
        connectivity: ConnectivityChecker | None = None,
        metrics: MetricsRecorder | None = None,
    ) -> None:
        """Initialize the factory.

        Args:
            settings: Application settings.
            api_client: HTTP client. Defaults to one built from settings.
            store: Local store. Defaults to the backend named in settings.
            connectivity: Connectivity oracle. Defaults to probing
                CONNECTIVITY_PROBE_URL when set, otherwise always connected.
            metrics: Metrics sink. Defaults to a Prometheus recorder.
        """
        self._settings = settings
        self._api_client = api_client or HttpxAPIClient.create(settings)
        self._store = store if store is not None else self._make_store(settings)
        self._connectivity = connectivity or self._make_connectivity(settings)
        self._metrics = metrics or PrometheusMetricsRecorder(namespace=settings.metrics_namespace)

    @classmethod
    def create(cls, settings: Settings | None = None) -> "RepositoryFactory":
        """Factory method to create RepositoryFactory with defaults.

        Args:
            settings: Application settings. If None, uses get_settings().

        Returns:
            Configured RepositoryFactory
        """
        return cls(settings=settings or get_settings())

    @staticmethod
    def _make_store(settings: Settings) -> ProductStore:
        if settings.local_store_backend == "redis":
            return RedisProductStore.create(settings)
        return InMemoryProductStore()

    @staticmethod
    def _make_connectivity(settings: Settings) -> ConnectivityChecker:
        if settings.connectivity_probe_url:
            return HttpConnectivityMonitor(settings.connectivity_probe_url, timeout=settings.api_timeout)
        return StaticConnectivity()

    def make_remote_repository(self) -> RemoteProductRepository:
        return RemoteProductRepository(self._api_client)

    def make_local_repository(self) -> LocalProductRepository:
        return LocalProductRepository(self._store)

    def make_product_repository(self, logger: BindableLogger | None = None) -> ProductRepository:
        """Build the full pipeline configured from settings."""
        settings = self._settings
        return build_pipeline(
            self.make_remote_repository(),
            self.make_local_repository(),
            self._connectivity,
            max_attempts=settings.retry_max_attempts,
            wait=wait_exponential(
                multiplier=settings.retry_wait_multiplier,
                min=settings.retry_wait_min,
                max=settings.retry_wait_max,
            ),
            cache_ttl=settings.cache_ttl,
            cache_max_size=settings.cache_max_size or None,
            fallback_on_error=settings.offline_fallback_on_error,
            logger=logger,
            metrics=self._metrics,
        )

    def make_sync_service(self) -> SyncService:
        return SyncService(remote=self.make_remote_repository(), local=self.make_local_repository())

    @property
    def connectivity(self) -> ConnectivityChecker:
        return self._connectivity

    @property
    def metrics(self) -> MetricsRecorder:
        return self._metrics

    async def aclose(self) -> None:
        """Release the HTTP clients and, for Redis, the connection pool."""
        await self._api_client.close()
        if isinstance(self._connectivity, HttpConnectivityMonitor):
            await self._connectivity.close()
        if isinstance(self._store, RedisProductStore):
            await self._store.close()
