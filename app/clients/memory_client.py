"""In-process cache client used when Redis is disabled or unreachable."""

from asyncio import CancelledError, Lock, Task, create_task
from asyncio import sleep as asyncio_sleep
from collections import OrderedDict
from collections.abc import AsyncGenerator
from contextlib import suppress
from fnmatch import fnmatch
from logging import getLogger
from time import monotonic

from app.configs import file_logger

logger = file_logger(getLogger(__name__))


class MemoryClient:
    """
    Asynchronous in-memory stand-in for RedisClient.

    Entries live in an ordered dict so the least recently used one can be
    evicted once ``max_entries`` is reached. Expired entries are dropped
    lazily on read and periodically by a background sweep started with
    ``start_lifecycle``.
    """

    DEFAULT_MAX_ENTRIES: int = 10_000
    DEFAULT_CLEANUP_INTERVAL: int = 60  # seconds

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        cleanup_interval: int = DEFAULT_CLEANUP_INTERVAL,
    ) -> None:
        self._entries: OrderedDict[str, str] = OrderedDict()
        self._expires_at: dict[str, float] = {}
        self._max_entries = max_entries
        self._cleanup_interval = cleanup_interval
        self._sweeper: Task[None] | None = None
        self._lock = Lock()
        self.is_connected: bool = True

    def __len__(self) -> int:
        return len(self._entries)

    async def start_lifecycle(self) -> None:
        """Start the background expiry sweep."""
        async with self._lock:
            if self._sweeper is None:
                self.is_connected = True
                self._sweeper = create_task(self._sweep_loop())
                logger.info("MemoryClient expiry sweep started.")

    async def _sweep_loop(self) -> None:
        while self.is_connected:
            try:
                await asyncio_sleep(self._cleanup_interval)
                removed = await self.purge_expired()
                if removed:
                    logger.debug("Memory cleanup: removed %d expired keys.", removed)
            except CancelledError:
                break
            except Exception:
                logger.exception("Error in memory cleanup loop")

    async def purge_expired(self) -> int:
        """Drop every expired entry and return how many were removed."""
        async with self._lock:
            now = monotonic()
            expired = [key for key, deadline in self._expires_at.items() if deadline <= now]
            return self._drop(*expired)

    def _expired(self, key: str) -> bool:
        deadline = self._expires_at.get(key)
        return deadline is not None and deadline <= monotonic()

    def _drop(self, *keys: str) -> int:
        count = 0
        for key in keys:
            if self._entries.pop(key, None) is not None:
                count += 1
            self._expires_at.pop(key, None)
        return count

    async def get(self, key: str) -> str | None:
        """Get a value, treating expired entries as absent."""
        async with self._lock:
            if self._expired(key):
                self._drop(key)
                return None
            value = self._entries.get(key)
            if value is not None:
                self._entries.move_to_end(key)
            return value

    async def set(self, key: str, value: str, ex: int | None = None) -> bool:
        """Store a value with an optional TTL in seconds."""
        async with self._lock:
            if key not in self._entries:
                while self._entries and len(self._entries) >= self._max_entries:
                    oldest, _ = self._entries.popitem(last=False)
                    self._expires_at.pop(oldest, None)

            self._entries[key] = value
            self._entries.move_to_end(key)

            # Plain SET clears any previous TTL, as in Redis.
            if ex:
                self._expires_at[key] = monotonic() + ex
            else:
                self._expires_at.pop(key, None)
            return True

    async def delete(self, *keys: str) -> int:
        """Delete keys and return how many existed."""
        async with self._lock:
            return self._drop(*keys)

    async def ttl(self, key: str) -> int:
        """Remaining TTL in seconds; -1 without expiry, -2 when missing."""
        async with self._lock:
            if key not in self._entries or self._expired(key):
                self._drop(key)
                return -2
            if key not in self._expires_at:
                return -1
            return int(self._expires_at[key] - monotonic())

    async def ping(self) -> bool:
        return self.is_connected

    async def scan_iter(
        self,
        pattern: str,
        count: int = 100,  # noqa: ARG002 - matches RedisClient.scan_iter
    ) -> AsyncGenerator[str]:
        """
        Yield live keys matching a glob-style pattern.

        Args:
            pattern: fnmatch pattern, e.g. ``blog:*``.
            count: Ignored; present so both clients share one signature.

        Yields:
            Matching keys.
        """
        async with self._lock:
            keys = [key for key in self._entries if not self._expired(key)]

        for key in keys:
            if fnmatch(key, pattern):
                yield key

    async def close(self) -> None:
        """Stop the sweep task and mark the client disconnected."""
        async with self._lock:
            self.is_connected = False
            sweeper, self._sweeper = self._sweeper, None
        if sweeper is not None:
            sweeper.cancel()
            with suppress(CancelledError):
                await sweeper
