"""Bounded retry decorator built on tenacity.

Only TransportError is retried. NotFoundError, ConflictError and
ValidationError are answers, not transient failures, and cancellation
always propagates immediately.

Retrying ``create`` against a remote that applied the write but timed
out before answering can surface as a ConflictError on a later attempt,
or duplicate the write on services without strict ids.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import structlog
from structlog.typing import BindableLogger
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from layered_repository.entities import ProductEntity
from layered_repository.exceptions import TransportError
from layered_repository.protocols import ProductRepository

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3


class RetryingProductRepository:
    """Re-invokes the decoratee on TransportError, up to ``max_attempts`` calls in total.

    Delays use ``asyncio.sleep`` by default, so waiting never blocks other
    calls on the same event loop. After the last attempt the final
    TransportError is raised unchanged.

    Example:
        ```python
        repo = RetryingProductRepository(remote, max_attempts=5)

        # No waiting (tests)
        from tenacity import wait_none
        repo = RetryingProductRepository(remote, wait=wait_none())
        ```
    """

    def __init__(
        self,
        decoratee: ProductRepository,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        wait: wait_base | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        logger: BindableLogger | None = None,
    ) -> None:
        """Initialize the retry decorator.

        Args:
            decoratee: The wrapped repository.
            max_attempts: Total number of calls, including the first one.
            wait: tenacity wait strategy. Defaults to exponential backoff
                between 0.5s and 8s.
            sleep: Coroutine used to wait between attempts.
            logger: structlog logger. Defaults to this module's logger.
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self._decoratee = decoratee
        self._max_attempts = max_attempts
        self._wait = wait or wait_exponential(multiplier=1.0, min=0.5, max=8.0)
        self._sleep = sleep
        self._logger = logger or structlog.get_logger(__name__)

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    async def get_one(self, product_id: str) -> ProductEntity:
        return await self._call("get_one", self._decoratee.get_one, product_id)

    async def get_all(self) -> list[ProductEntity]:
        return await self._call("get_all", self._decoratee.get_all)

    async def create(self, product: ProductEntity) -> None:
        await self._call("create", self._decoratee.create, product)

    async def update(self, product: ProductEntity) -> None:
        await self._call("update", self._decoratee.update, product)

    async def delete(self, product_id: str) -> None:
        await self._call("delete", self._decoratee.delete, product_id)

    async def _call(self, operation: str, func: Callable[..., Awaitable[T]], *args: Any) -> T:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=self._wait,
            retry=retry_if_exception_type(TransportError),
            sleep=self._sleep,
            before_sleep=lambda state: self._log_retry(operation, state),
            reraise=True,
        )
        return await retrying(func, *args)

    def _log_retry(self, operation: str, state: RetryCallState) -> None:
        error = state.outcome.exception() if state.outcome else None
        self._logger.warning(
            "repository.retry",
            operation=operation,
            attempt=state.attempt_number,
            max_attempts=self._max_attempts,
            delay=state.next_action.sleep if state.next_action else None,
            error=str(error),
        )
