"""Offline-support decorator.

Routes calls to a local repository when the network is unavailable and
mirrors successful remote results into it while online.

Policy:
    Disconnected -> every operation is applied to the local repository only.
    Connected    -> the primary is called first; results and confirmed
                    writes are mirrored locally on a best-effort basis.
                    With ``fallback_on_error`` a read that fails with
                    TransportError is served from the local repository.
                    Writes never fall back.
"""

from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog
from structlog.typing import BindableLogger

from layered_repository.entities import ProductEntity
from layered_repository.exceptions import NotFoundError, RepositoryError, TransportError
from layered_repository.protocols import ConnectivityChecker, LocalRepository, ProductRepository

T = TypeVar("T")


class OfflineProductRepository:
    """Offline-first routing between a primary and a local repository.

    Write-back to the local repository is an optimisation: its failures
    are logged and never become the caller's error. There is no
    transaction between the two sides, so the local copy may lag behind.

    Example:
        ```python
        repo = OfflineProductRepository(
            CachingProductRepository(remote),
            local=LocalProductRepository(InMemoryProductStore()),
            connectivity=StaticConnectivity(),
        )
        ```
    """

    def __init__(
        self,
        primary: ProductRepository,
        local: LocalRepository,
        connectivity: ConnectivityChecker,
        fallback_on_error: bool = True,
        logger: BindableLogger | None = None,
    ) -> None:
        """Initialize the offline decorator.

        Args:
            primary: Repository used while connected (usually remote or cached remote).
            local: Repository used while disconnected and as write-back target.
            connectivity: Oracle consulted on every call.
            fallback_on_error: Serve reads locally when the primary raises TransportError.
            logger: structlog logger. Defaults to this module's logger.
        """
        self._primary = primary
        self._local = local
        self._connectivity = connectivity
        self._fallback_on_error = fallback_on_error
        self._logger = logger or structlog.get_logger(__name__)

    async def get_one(self, product_id: str) -> ProductEntity:
        if not self._connectivity.is_connected:
            return await self._local.get_one(product_id)

        try:
            product = await self._primary.get_one(product_id)
        except TransportError as e:
            return await self._fall_back("get_one", e, lambda: self._local.get_one(product_id))
        await self._write_back("get_one", lambda: self._local.save(product))
        return product

    async def get_all(self) -> list[ProductEntity]:
        if not self._connectivity.is_connected:
            return await self._local.get_all()

        try:
            products = await self._primary.get_all()
        except TransportError as e:
            return await self._fall_back("get_all", e, self._local.get_all)
        await self._write_back("get_all", lambda: self._local.save_all(products))
        return products

    async def create(self, product: ProductEntity) -> None:
        if not self._connectivity.is_connected:
            await self._local.create(product)
            return
        await self._primary.create(product)
        await self._write_back("create", lambda: self._local.save(product))

    async def update(self, product: ProductEntity) -> None:
        if not self._connectivity.is_connected:
            await self._local.update(product)
            return
        await self._primary.update(product)
        await self._write_back("update", lambda: self._local.save(product))

    async def delete(self, product_id: str) -> None:
        if not self._connectivity.is_connected:
            await self._local.delete(product_id)
            return
        await self._primary.delete(product_id)
        await self._write_back("delete", lambda: self._delete_local(product_id))

    async def _delete_local(self, product_id: str) -> None:
        try:
            await self._local.delete(product_id)
        except NotFoundError:
            # Never mirrored locally
            pass

    async def _fall_back(
        self,
        operation: str,
        primary_error: TransportError,
        local_call: Callable[[], Awaitable[T]],
    ) -> T:
        """Serve a failed read locally, or re-raise the primary's error."""
        if not self._fallback_on_error:
            raise primary_error

        self._logger.warning(
            "offline.fallback_to_local",
            operation=operation,
            error=str(primary_error),
        )
        try:
            return await local_call()
        except RepositoryError as local_error:
            self._logger.warning(
                "offline.fallback_failed",
                operation=operation,
                error_type=type(local_error).__name__,
            )
            raise primary_error

    async def _write_back(self, operation: str, call: Callable[[], Awaitable[None]]) -> None:
        try:
            await call()
        except RepositoryError as e:
            self._logger.warning(
                "offline.write_back_failed",
                operation=operation,
                error_type=type(e).__name__,
                error=str(e),
            )
