# app/managers/cache_manager.py
"""Cache manager wrapping Redis, with an in-memory fallback."""

from logging import DEBUG, getLogger
from typing import Any
from uuid import UUID

from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError

from app.clients.memory_client import MemoryClient
from app.clients.protocols import CacheClientProtocol
from app.clients.redis_client import RedisClient
from app.configs import CacheConfig, file_logger, settings
from app.data import CacheStatistics
from app.errors import BASE_EXCEPTION, CacheExceptionError, CacheKeyError
from app.utils.cache_keys import build_key
from app.utils.cache_serializer import (
    compress,
    decompress,
    deserialize,
    do_compress,
    serialize,
)

logger = file_logger(getLogger(__name__))

CACHE_ERRORS = BASE_EXCEPTION + (RedisError, CacheExceptionError)
CLEAR_BATCH_SIZE = 1000


class CacheManager:
    """
    Cache manager for JSON-serializable values under a shared key prefix.

    Features:
        - Automatic fallback to in-memory cache
        - Optional compression for large values
        - TTL capped by ``CacheConfig.max_ttl``
        - Statistics tracking

    Every failure of the backing store surfaces as ``CacheKeyError`` so
    callers can decide whether a cache problem is fatal to them.
    """

    def __init__(
        self,
        redis_client: RedisClient | None = None,
        memory_client: MemoryClient | None = None,
        cache_config: CacheConfig | None = None,
    ) -> None:
        """Initialize cache manager."""
        self.redis_client = redis_client or RedisClient()
        self.memory_client = memory_client or MemoryClient()
        self._client: CacheClientProtocol = self.memory_client
        self.is_redis_available = False
        self.cache_config = cache_config or CacheConfig()
        self.statistics = CacheStatistics()

    @property
    def backend(self) -> str:
        return "redis" if self.is_redis_available else "in-memory"

    async def initialize(self) -> None:
        """
        Initialize cache manager by connecting to Redis.

        If Redis is disabled or the connection fails, it falls back to an
        in-memory cache.
        """
        if settings.REDIS_ENABLED:
            try:
                await self.redis_client.connect()
                self._client = self.redis_client
                self.is_redis_available = True
                logger.info("Cache manager initialized with Redis backend.")
                return
            except RedisConnectionError as e:
                logger.warning("Redis connection failed: %s. Falling back to in-memory cache.", e)
        else:
            logger.info("Redis disabled. Using in-memory cache.")

        self._client = self.memory_client
        self.is_redis_available = False
        await self.memory_client.start_lifecycle()
        logger.info("Cache manager initialized with in-memory backend.")

    async def shutdown(self) -> None:
        """Close the active client connection."""
        if self.is_redis_available:
            await self.redis_client.disconnect()
            self.is_redis_available = False
        await self.memory_client.close()
        logger.info("Cache manager shutdown successfully.")

    @staticmethod
    def build_key(tag: str, *params: str | int | UUID) -> str:
        """Build a logical cache key, e.g. ``posts:1:10``."""
        return build_key(tag, *params)

    def _full_key(self, key: str) -> str:
        return f"{self.cache_config.key_prefix}:{key}"

    async def get(self, key: str) -> Any:  # noqa: ANN401
        """
        Get a value from cache.

        Args:
            key: Logical key without the application prefix.

        Returns:
            The deserialized value, or None when the key is absent or expired.

        Raises:
            CacheKeyError: If the backing store or deserialization fails.
        """
        full_key = self._full_key(key)
        try:
            if logger.isEnabledFor(DEBUG):
                logger.debug("Getting from cache: %s", full_key)
            cached_value = await self._client.get(full_key)
            if cached_value is None:
                self.statistics.record_miss()
                return None

            self.statistics.record_hit(len(cached_value.encode("utf-8")))
            return deserialize(decompress(cached_value))
        except CACHE_ERRORS as e:
            logger.warning("Cache get failed for key %s: %s", full_key, e)
            self.statistics.record_error()
            raise CacheKeyError("get", key) from e

    async def set(self, key: str, value: object, ttl: int | None = None) -> bool:
        """
        Store a value under ``key``.

        Args:
            key: Logical key without the application prefix.
            value: JSON-serializable value.
            ttl: Lifetime in seconds, defaults to ``CacheConfig.default_ttl``.

        Returns:
            True when the store acknowledged the write.

        Raises:
            CacheKeyError: If serialization or the backing store fails.
        """
        full_key = self._full_key(key)
        try:
            serialized = serialize(value)
            if self.cache_config.compression_enabled and do_compress(
                serialized,
                self.cache_config.compression_threshold,
            ):
                serialized = compress(serialized)

            ex = ttl if ttl is not None else self.cache_config.default_ttl
            ex = min(ex, self.cache_config.max_ttl)

            success = await self._client.set(full_key, serialized, ex=ex)
            self.statistics.record_set(len(serialized.encode("utf-8")))
        except CACHE_ERRORS as e:
            logger.warning("Cache set failed for key %s: %s", full_key, e)
            self.statistics.record_error()
            raise CacheKeyError("set", key) from e
        return success

    async def delete(self, *keys: str) -> int:
        """Delete keys from cache and return how many existed."""
        if not keys:
            return 0
        try:
            deleted_count = await self._client.delete(*(self._full_key(key) for key in keys))
            if deleted_count:
                self.statistics.record_delete(deleted_count)
        except CACHE_ERRORS as e:
            logger.warning("Cache delete failed for keys %s: %s", keys, e)
            self.statistics.record_error()
            raise CacheKeyError("delete", ", ".join(keys)) from e
        return deleted_count

    async def clear(self) -> int:
        """
        Remove every entry under the application prefix.

        Keys are scanned and deleted in batches so a large keyspace never
        has to be held in memory at once.

        Returns:
            Number of keys removed.

        Raises:
            CacheKeyError: If scanning or deleting fails.
        """
        pattern = f"{self.cache_config.key_prefix}:*"
        deleted_total = 0
        keys_batch: list[str] = []
        try:
            async for key in self._client.scan_iter(pattern):
                keys_batch.append(key)
                if len(keys_batch) >= CLEAR_BATCH_SIZE:
                    deleted_total += await self._client.delete(*keys_batch)
                    keys_batch = []

            if keys_batch:
                deleted_total += await self._client.delete(*keys_batch)
        except CACHE_ERRORS as e:
            logger.warning("Cache clear failed for pattern %s: %s", pattern, e)
            self.statistics.record_error()
            raise CacheKeyError("clear") from e

        if deleted_total:
            self.statistics.record_delete(deleted_total)
            logger.info("Cleared %d keys for pattern '%s'.", deleted_total, pattern)
        return deleted_total

    async def ping(self) -> bool:
        """Ping the cache server."""
        try:
            return bool(await self._client.ping())
        except CACHE_ERRORS:
            logger.exception("Cache ping failed")
            return False

    def get_statistics(self) -> dict[str, int | float | str]:
        """Get cache statistics."""
        return self.statistics.to_dict()


cache_manager = CacheManager()
