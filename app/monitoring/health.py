"""
Readiness checks for the database and the cache.

Liveness (``/health``) never touches a dependency. Readiness
(``/health/ready``) probes each dependency with a timeout and reports the
result per component.

Response Format
---------------
{
    "status": "ready" | "not_ready",
    "timestamp": "2026-10-19T12:00:00+00:00",
    "version": "1.0.0",
    "checks": {
        "database": {"status": "pass", "response_ms": 15},
        "cache": {"status": "pass", "response_ms": 1, "backend": "redis"}
    }
}
"""

from asyncio import wait_for
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import StrEnum
from time import perf_counter
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from app.managers.cache_manager import CacheManager
from app.utils.helpers import iso_now

HEALTH_CHECK_TIMEOUTS: dict[str, float] = {
    "database": 2.0,
    "cache": 1.0,
}


class CheckStatus(StrEnum):
    """Status values for individual health checks."""

    PASS = "pass"
    FAIL = "fail"


class OverallStatus(StrEnum):
    """Overall readiness status."""

    READY = "ready"
    NOT_READY = "not_ready"


@dataclass
class ComponentCheck:
    """
    Result of an individual health check component.

    Attributes
    ----------
    status : CheckStatus
        Status of the check
    response_ms : int | None
        Response time in milliseconds
    message : str | None
        Optional error details
    details : dict[str, Any]
        Additional check-specific details
    """

    status: CheckStatus
    response_ms: int | None = None
    message: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"status": self.status.value}
        if self.response_ms is not None:
            result["response_ms"] = self.response_ms
        if self.message is not None:
            result["message"] = self.message
        if self.details:
            result.update(self.details)
        return result


@dataclass
class HealthStatus:
    """Aggregated readiness of every component."""

    status: OverallStatus
    timestamp: str
    version: str
    checks: dict[str, ComponentCheck] = field(default_factory=dict)

    @property
    def is_healthy(self) -> bool:
        return self.status == OverallStatus.READY

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "timestamp": self.timestamp,
            "version": self.version,
            "checks": {name: check.to_dict() for name, check in self.checks.items()},
        }


def _elapsed_ms(start: float) -> int:
    return int((perf_counter() - start) * 1000)


class HealthChecker:
    """
    Readiness checker for the database and the cache.

    Examples
    --------
    >>> checker = HealthChecker(cache_manager, ping_database, version="1.0.0")
    >>> status = await checker.check_readiness()
    >>> status.is_healthy
    True
    """

    def __init__(
        self,
        cache: CacheManager,
        database_probe: Callable[[], Awaitable[None]],
        version: str = "1.0.0",
    ) -> None:
        """
        Initialize the health checker.

        Args:
            cache: Cache manager whose active backend is pinged.
            database_probe: Coroutine function raising when the database is down.
            version: Application version string.
        """
        self.cache = cache
        self.database_probe = database_probe
        self.version = version

    async def check_readiness(self) -> HealthStatus:
        """
        Probe every dependency.

        Returns:
            HealthStatus, ``NOT_READY`` as soon as one component fails.
        """
        checks = {
            "database": await self._check_database(),
            "cache": await self._check_cache(),
        }
        ready = all(check.status == CheckStatus.PASS for check in checks.values())
        return HealthStatus(
            status=OverallStatus.READY if ready else OverallStatus.NOT_READY,
            timestamp=iso_now(),
            version=self.version,
            checks=checks,
        )

    async def _check_database(self) -> ComponentCheck:
        start = perf_counter()
        try:
            await wait_for(self.database_probe(), timeout=HEALTH_CHECK_TIMEOUTS["database"])
        except TimeoutError:
            return ComponentCheck(
                status=CheckStatus.FAIL,
                response_ms=_elapsed_ms(start),
                message="Database check timed out",
            )
        except (SQLAlchemyError, OSError, RuntimeError) as e:
            return ComponentCheck(
                status=CheckStatus.FAIL,
                response_ms=_elapsed_ms(start),
                message=f"Database check failed: {e!s}",
            )
        return ComponentCheck(status=CheckStatus.PASS, response_ms=_elapsed_ms(start))

    async def _check_cache(self) -> ComponentCheck:
        start = perf_counter()
        details = {"backend": self.cache.backend}
        try:
            alive = await wait_for(self.cache.ping(), timeout=HEALTH_CHECK_TIMEOUTS["cache"])
        except TimeoutError:
            return ComponentCheck(
                status=CheckStatus.FAIL,
                response_ms=_elapsed_ms(start),
                message="Cache check timed out",
                details=details,
            )
        if not alive:
            return ComponentCheck(
                status=CheckStatus.FAIL,
                response_ms=_elapsed_ms(start),
                message="Cache did not answer ping",
                details=details,
            )
        return ComponentCheck(
            status=CheckStatus.PASS,
            response_ms=_elapsed_ms(start),
            details=details,
        )
