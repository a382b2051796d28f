"""In-memory read-through cache decorator."""

import asyncio
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass

from layered_repository.entities import ProductEntity
from layered_repository.exceptions import NotFoundError
from layered_repository.protocols import ProductRepository


@dataclass(frozen=True)
class _CacheEntry:
    # None marks a confirmed delete
    product: ProductEntity | None
    expires_at: float | None


class CachingProductRepository:
    """Read-through cache in front of any ProductRepository.

    Behaviour:
    - get_one: served from the cache when present, otherwise delegated and
      the result cached
    - get_all: always delegated; every returned product is cached
    - create/update: delegated first, cached only after success
    - delete: delegated first; after success the key is remembered as
      deleted, so get_one raises NotFoundError without delegating

    The cache only ever holds state the decoratee has confirmed. Concurrent
    callers are safe: the map is guarded by an asyncio.Lock (never held
    while awaiting the decoratee), and every confirmed write stamps its key
    with a version so that a read which started before the write cannot
    put an older value back afterwards.

    Example:
        ```python
        repo = CachingProductRepository(RemoteProductRepository(client))
        repo = CachingProductRepository(remote, ttl=300, max_size=1000)
        ```
    """

    def __init__(
        self,
        decoratee: ProductRepository,
        ttl: float | None = None,
        max_size: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the caching decorator.

        Args:
            decoratee: The wrapped repository.
            ttl: Seconds an entry stays valid. None disables expiry.
            max_size: Maximum number of entries (least recently used are
                evicted first). None or 0 means unbounded.
            clock: Monotonic time source, in seconds.
        """
        self._decoratee = decoratee
        self._ttl = ttl
        self._max_size = max_size or None
        self._clock = clock
        self._entries: OrderedDict[str, _CacheEntry] = OrderedDict()
        self._lock = asyncio.Lock()
        self._version = 0
        self._written_at: dict[str, int] = {}
        self._reads_in_flight = 0

    async def get_one(self, product_id: str) -> ProductEntity:
        async with self._lock:
            entry = self._lookup(product_id)
            if entry is not None:
                if entry.product is None:
                    raise NotFoundError(product_id)
                return entry.product
            started_at = self._begin_read()
        try:
            product = await self._decoratee.get_one(product_id)
            async with self._lock:
                self._populate(product, started_at)
            return product
        finally:
            self._end_read()

    async def get_all(self) -> list[ProductEntity]:
        async with self._lock:
            started_at = self._begin_read()
        try:
            products = await self._decoratee.get_all()
            async with self._lock:
                for product in products:
                    self._populate(product, started_at)
            return products
        finally:
            self._end_read()

    async def create(self, product: ProductEntity) -> None:
        await self._decoratee.create(product)
        async with self._lock:
            self._confirm_write(product.id, product)

    async def update(self, product: ProductEntity) -> None:
        await self._decoratee.update(product)
        async with self._lock:
            self._confirm_write(product.id, product)

    async def delete(self, product_id: str) -> None:
        await self._decoratee.delete(product_id)
        async with self._lock:
            self._confirm_write(product_id, None)

    async def invalidate(self, product_id: str) -> None:
        """Drop a single entry without touching the decoratee."""
        async with self._lock:
            self._entries.pop(product_id, None)

    async def clear(self) -> None:
        """Drop every entry without touching the decoratee."""
        async with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        now = self._clock()
        return sum(1 for entry in self._entries.values() if self._is_live(entry, now))

    def __contains__(self, product_id: object) -> bool:
        entry = self._entries.get(product_id) if isinstance(product_id, str) else None
        return entry is not None and self._is_live(entry, self._clock())

    @staticmethod
    def _is_live(entry: _CacheEntry, now: float) -> bool:
        """Cached product that has not expired; tombstones are not live."""
        if entry.product is None:
            return False
        return entry.expires_at is None or entry.expires_at > now

    # Helpers below must be called with the lock held (except _end_read).

    def _lookup(self, product_id: str) -> _CacheEntry | None:
        entry = self._entries.get(product_id)
        if entry is None:
            return None
        if entry.expires_at is not None and entry.expires_at <= self._clock():
            del self._entries[product_id]
            return None
        self._entries.move_to_end(product_id)
        return entry

    def _store(self, product_id: str, product: ProductEntity | None) -> None:
        expires_at = self._clock() + self._ttl if self._ttl is not None else None
        self._entries[product_id] = _CacheEntry(product, expires_at)
        self._entries.move_to_end(product_id)
        if self._max_size is not None:
            while len(self._entries) > self._max_size:
                self._entries.popitem(last=False)

    def _populate(self, product: ProductEntity, started_at: int) -> None:
        # A write confirmed after this read began wins over the read result.
        if self._written_at.get(product.id, 0) > started_at:
            return
        self._store(product.id, product)

    def _confirm_write(self, product_id: str, product: ProductEntity | None) -> None:
        self._version += 1
        if self._reads_in_flight:
            self._written_at[product_id] = self._version
        self._store(product_id, product)

    def _begin_read(self) -> int:
        self._reads_in_flight += 1
        return self._version

    def _end_read(self) -> None:
        self._reads_in_flight -= 1
        if not self._reads_in_flight:
            self._written_at.clear()
