"""Test doubles shared by the test modules."""

import asyncio
from collections import Counter, defaultdict

from redis.exceptions import ConnectionError as RedisConnectionError

from layered_repository.entities import ProductEntity
from layered_repository.exceptions import ConflictError, NotFoundError
from layered_repository.repositories.redis_store import REPLACE_IF_EXISTS

BASE_URL = "https://catalog.test"


class RecordingRepository:
    """Dict-backed ProductRepository / LocalRepository that counts calls.

    Failures can be scripted per operation, either for the next N calls
    (``fail_next``) or for every call (``fail_always``). ``hold`` blocks an
    operation on an asyncio.Event after it has read its result, which lets
    tests interleave concurrent calls deterministically.
    """

    def __init__(self, products: list[ProductEntity] | None = None) -> None:
        self.products: dict[str, ProductEntity] = {p.id: p for p in products or []}
        self.calls: Counter[str] = Counter()
        self.hold: dict[str, asyncio.Event] = {}
        self._queued: dict[str, list[BaseException]] = defaultdict(list)
        self._always: dict[str, BaseException] = {}

    def fail_next(self, operation: str, *errors: BaseException) -> None:
        self._queued[operation].extend(errors)

    def fail_always(self, operation: str, error: BaseException) -> None:
        self._always[operation] = error

    def _enter(self, operation: str) -> None:
        self.calls[operation] += 1
        if operation in self._always:
            raise self._always[operation]
        if self._queued[operation]:
            raise self._queued[operation].pop(0)

    async def _wait(self, operation: str) -> None:
        if operation in self.hold:
            await self.hold[operation].wait()

    async def get_one(self, product_id: str) -> ProductEntity:
        self._enter("get_one")
        product = self.products.get(product_id)
        await self._wait("get_one")
        if product is None:
            raise NotFoundError(product_id)
        return product

    async def get_all(self) -> list[ProductEntity]:
        self._enter("get_all")
        products = list(self.products.values())
        await self._wait("get_all")
        return products

    async def create(self, product: ProductEntity) -> None:
        self._enter("create")
        if product.id in self.products:
            raise ConflictError(product.id)
        self.products[product.id] = product

    async def update(self, product: ProductEntity) -> None:
        self._enter("update")
        if product.id not in self.products:
            raise NotFoundError(product.id)
        self.products[product.id] = product

    async def delete(self, product_id: str) -> None:
        self._enter("delete")
        if self.products.pop(product_id, None) is None:
            raise NotFoundError(product_id)

    async def save(self, product: ProductEntity) -> None:
        self._enter("save")
        self.products[product.id] = product

    async def save_all(self, products: list[ProductEntity]) -> None:
        self._enter("save_all")
        for product in products:
            self.products[product.id] = product


class FakeRedis:
    """The handful of async Redis hash commands RedisProductStore uses.

    Every command yields to the event loop before touching the data, like a
    network round trip, and then executes atomically like the Redis server.
    ``eval`` understands only the store's replace-if-exists script.
    """

    def __init__(self) -> None:
        self.hashes: dict[str, dict[str, str]] = defaultdict(dict)
        self.down = False
        self.closed = False

    async def _check(self) -> None:
        await asyncio.sleep(0)
        if self.down:
            raise RedisConnectionError("Connection refused")

    async def hget(self, name: str, key: str) -> str | None:
        await self._check()
        return self.hashes[name].get(key)

    async def hgetall(self, name: str) -> dict[str, str]:
        await self._check()
        return dict(self.hashes[name])

    async def hset(self, name: str, key: str, value: str) -> int:
        await self._check()
        is_new = key not in self.hashes[name]
        self.hashes[name][key] = value
        return int(is_new)

    async def hsetnx(self, name: str, key: str, value: str) -> int:
        await self._check()
        if key in self.hashes[name]:
            return 0
        self.hashes[name][key] = value
        return 1

    async def eval(self, script: str, numkeys: int, *keys_and_args: str) -> int:
        await self._check()
        assert script == REPLACE_IF_EXISTS and numkeys == 1
        name, key, value = keys_and_args
        if key not in self.hashes[name]:
            return 0
        self.hashes[name][key] = value
        return 1

    async def hdel(self, name: str, *keys: str) -> int:
        await self._check()
        return sum(1 for key in keys if self.hashes[name].pop(key, None) is not None)

    async def ping(self) -> bool:
        await self._check()
        return True

    async def aclose(self) -> None:
        self.closed = True
