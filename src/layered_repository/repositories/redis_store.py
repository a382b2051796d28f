"""Redis implementation of ProductStore.

All products live in a single Redis hash: field = product id, value =
the product payload as JSON. Redis failures surface as TransportError.
Conditional writes run server-side (HSETNX, a Lua script, HDEL), so they
stay atomic across clients.
"""

import redis.asyncio as redis
from pydantic import ValidationError as PayloadValidationError
from redis.exceptions import RedisError

from layered_repository.config import Settings, get_redis_client, get_settings
from layered_repository.dto import ProductPayload
from layered_repository.entities import ProductEntity
from layered_repository.exceptions import TransportError

# HSET only when the field exists; returns 1 if replaced, 0 otherwise
REPLACE_IF_EXISTS = """
if redis.call("HEXISTS", KEYS[1], ARGV[1]) == 1 then
    redis.call("HSET", KEYS[1], ARGV[1], ARGV[2])
    return 1
end
return 0
"""


class RedisProductStore:
    """Redis hash implementation of the ProductStore protocol.

    This class satisfies the ProductStore protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        store = RedisProductStore.create()
        local = LocalProductRepository(store)
        ```
    """

    def __init__(self, redis_client: redis.Redis, key: str = "products") -> None:
        """Initialize the Redis store.

        Args:
            redis_client: Async Redis client (decode_responses=True).
            key: Name of the hash holding the products.
        """
        self._client = redis_client
        self._key = key

    @classmethod
    def create(cls, settings: Settings | None = None) -> "RedisProductStore":
        """Factory method to create RedisProductStore from settings.

        Args:
            settings: Application settings. If None, uses get_settings().

        Returns:
            Configured RedisProductStore
        """
        settings = settings or get_settings()
        return cls(redis_client=get_redis_client(settings), key=settings.redis_products_key)

    async def get(self, product_id: str) -> ProductEntity | None:
        try:
            raw = await self._client.hget(self._key, product_id)
        except RedisError as e:
            raise TransportError(f"Redis HGET failed for {product_id!r}") from e
        if raw is None:
            return None
        return _decode(raw)

    async def get_all(self) -> list[ProductEntity]:
        try:
            raw_products = await self._client.hgetall(self._key)
        except RedisError as e:
            raise TransportError("Redis HGETALL failed") from e
        return [_decode(raw) for raw in raw_products.values()]

    async def put(self, product: ProductEntity) -> None:
        payload = ProductPayload.from_entity(product).model_dump_json()
        try:
            await self._client.hset(self._key, product.id, payload)
        except RedisError as e:
            raise TransportError(f"Redis HSET failed for {product.id!r}") from e

    async def insert(self, product: ProductEntity) -> bool:
        payload = ProductPayload.from_entity(product).model_dump_json()
        try:
            added: int = await self._client.hsetnx(self._key, product.id, payload)
        except RedisError as e:
            raise TransportError(f"Redis HSETNX failed for {product.id!r}") from e
        return bool(added)

    async def replace(self, product: ProductEntity) -> bool:
        payload = ProductPayload.from_entity(product).model_dump_json()
        try:
            replaced: int = await self._client.eval(REPLACE_IF_EXISTS, 1, self._key, product.id, payload)
        except RedisError as e:
            raise TransportError(f"Redis replace failed for {product.id!r}") from e
        return bool(replaced)

    async def delete(self, product_id: str) -> bool:
        try:
            removed: int = await self._client.hdel(self._key, product_id)
        except RedisError as e:
            raise TransportError(f"Redis HDEL failed for {product_id!r}") from e
        return removed > 0

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except RedisError:
            return False

    async def close(self) -> None:
        """Close the Redis connection pool."""
        await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client


def _decode(raw: str | bytes) -> ProductEntity:
    try:
        return ProductPayload.model_validate_json(raw).to_entity()
    except PayloadValidationError as e:
        raise TransportError("Corrupt product payload in Redis") from e
