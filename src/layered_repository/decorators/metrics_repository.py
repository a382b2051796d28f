"""Latency and outcome metrics decorator."""

import asyncio
import time
from collections.abc import Awaitable, Callable
from functools import partial
from typing import TypeVar

from layered_repository.entities import ProductEntity
from layered_repository.protocols import MetricsRecorder, ProductRepository

T = TypeVar("T")

RESULT_SIZE_GAUGE = "get_all_result_size"


class MetricsProductRepository:
    """Records latency and a success/error counter for every call.

    ``get_all`` additionally sets the ``get_all_result_size`` gauge. Like
    the logging decorator it never changes results or errors. Placed
    outermost, the latency includes every retry and fallback below it.

    Example:
        ```python
        recorder = PrometheusMetricsRecorder()
        repo = MetricsProductRepository(LoggingProductRepository(inner), recorder)
        ```
    """

    def __init__(self, decoratee: ProductRepository, metrics: MetricsRecorder) -> None:
        self._decoratee = decoratee
        self._metrics = metrics

    async def get_one(self, product_id: str) -> ProductEntity:
        return await self._measure("get_one", partial(self._decoratee.get_one, product_id))

    async def get_all(self) -> list[ProductEntity]:
        products = await self._measure("get_all", self._decoratee.get_all)
        self._metrics.record_gauge(RESULT_SIZE_GAUGE, float(len(products)))
        return products

    async def create(self, product: ProductEntity) -> None:
        await self._measure("create", partial(self._decoratee.create, product))

    async def update(self, product: ProductEntity) -> None:
        await self._measure("update", partial(self._decoratee.update, product))

    async def delete(self, product_id: str) -> None:
        await self._measure("delete", partial(self._decoratee.delete, product_id))

    async def _measure(self, operation: str, call: Callable[[], Awaitable[T]]) -> T:
        start = time.perf_counter()
        outcome = "error"
        try:
            result = await call()
            outcome = "success"
            return result
        except asyncio.CancelledError:
            outcome = "cancelled"
            raise
        finally:
            self._metrics.record_latency(operation, time.perf_counter() - start)
            self._metrics.increment_counter(operation, outcome)
