"""Structured logging decorator."""

import asyncio
import time
from collections.abc import Awaitable, Callable
from functools import partial
from typing import Any, TypeVar

import structlog
from structlog.typing import BindableLogger

from layered_repository.entities import ProductEntity
from layered_repository.protocols import ProductRepository

T = TypeVar("T")


class LoggingProductRepository:
    """Logs every call, its outcome and its duration.

    Strictly transparent: return values pass through untouched and any
    exception is re-raised as the very same object.

    Events:
        repository.call.started    operation, plus product_id where relevant
        repository.call.succeeded  duration_ms, plus result_count for get_all
        repository.call.failed     duration_ms, error_type, error
        repository.call.cancelled  duration_ms
    """

    def __init__(self, decoratee: ProductRepository, logger: BindableLogger | None = None) -> None:
        """Initialize the logging decorator.

        Args:
            decoratee: The wrapped repository.
            logger: structlog logger. Defaults to this module's logger.
        """
        self._decoratee = decoratee
        self._logger = logger or structlog.get_logger(__name__)

    async def get_one(self, product_id: str) -> ProductEntity:
        return await self._observe(
            "get_one", partial(self._decoratee.get_one, product_id), product_id=product_id
        )

    async def get_all(self) -> list[ProductEntity]:
        return await self._observe("get_all", self._decoratee.get_all)

    async def create(self, product: ProductEntity) -> None:
        await self._observe("create", partial(self._decoratee.create, product), product_id=product.id)

    async def update(self, product: ProductEntity) -> None:
        await self._observe("update", partial(self._decoratee.update, product), product_id=product.id)

    async def delete(self, product_id: str) -> None:
        await self._observe("delete", partial(self._decoratee.delete, product_id), product_id=product_id)

    async def _observe(self, operation: str, call: Callable[[], Awaitable[T]], **context: Any) -> T:
        log = self._logger.bind(operation=operation, **context)
        log.debug("repository.call.started")
        start = time.perf_counter()
        try:
            result = await call()
        except asyncio.CancelledError:
            log.info("repository.call.cancelled", duration_ms=_elapsed_ms(start))
            raise
        except Exception as e:
            log.warning(
                "repository.call.failed",
                duration_ms=_elapsed_ms(start),
                error_type=type(e).__name__,
                error=str(e),
            )
            raise

        if isinstance(result, list):
            log.info("repository.call.succeeded", duration_ms=_elapsed_ms(start), result_count=len(result))
        else:
            log.info("repository.call.succeeded", duration_ms=_elapsed_ms(start))
        return result


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 3)
