"""Cache statistics tracking."""

from dataclasses import dataclass, field
from threading import Lock

from app.utils.helpers import iso_now


@dataclass
class CacheStatistics:
    """Counters for cache traffic, shared by every cache operation."""

    hits: int = 0
    misses: int = 0
    sets: int = 0
    deletes: int = 0
    errors: int = 0
    total_bytes_written: int = 0
    total_bytes_read: int = 0
    created_at: str = field(default_factory=iso_now)
    last_updated_at: str = field(default_factory=iso_now)
    _lock: Lock = field(default_factory=Lock, init=False, repr=False)

    def _bump(self, counter: str, amount: int = 1) -> None:
        with self._lock:
            setattr(self, counter, getattr(self, counter) + amount)
            self.last_updated_at = iso_now()

    def record_hit(self, bytes_read: int = 0) -> None:
        """Record a cache hit and the size of the payload read."""
        self._bump("hits")
        if bytes_read:
            self._bump("total_bytes_read", bytes_read)

    def record_miss(self) -> None:
        self._bump("misses")

    def record_set(self, bytes_written: int = 0) -> None:
        """
        Record a cache write.

        Args:
            bytes_written: Size of the stored payload.
        """
        self._bump("sets")
        if bytes_written:
            self._bump("total_bytes_written", bytes_written)

    def record_delete(self, count: int = 1) -> None:
        self._bump("deletes", count)

    def record_error(self) -> None:
        self._bump("errors")

    @property
    def total_requests(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Hit rate as a percentage (0-100)."""
        total = self.total_requests
        return (self.hits / total * 100) if total > 0 else 0.0

    def to_dict(self) -> dict[str, int | float | str]:
        """
        Snapshot the counters.

        Returns:
            Dictionary representation of statistics.
        """
        with self._lock:
            return {
                "hits": self.hits,
                "misses": self.misses,
                "sets": self.sets,
                "deletes": self.deletes,
                "errors": self.errors,
                "total_bytes_written": self.total_bytes_written,
                "total_bytes_read": self.total_bytes_read,
                "hit_rate": f"{self.hit_rate:.2f}%",
                "total_requests": self.total_requests,
                "created_at": self.created_at,
                "last_updated_at": self.last_updated_at,
            }
