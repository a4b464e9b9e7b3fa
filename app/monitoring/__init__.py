"""
Observability for the Blog API.

Structured logging with request correlation and readiness checks for the
database and the cache.
"""

from app.monitoring.health import (
    CheckStatus,
    ComponentCheck,
    HealthChecker,
    HealthStatus,
    OverallStatus,
)
from app.monitoring.logging import (
    bind_request_id,
    clear_context,
    configure_logging,
    sanitize_headers,
    sanitize_log_message,
)

__all__ = [
    "CheckStatus",
    "ComponentCheck",
    "HealthChecker",
    "HealthStatus",
    "OverallStatus",
    "bind_request_id",
    "clear_context",
    "configure_logging",
    "sanitize_headers",
    "sanitize_log_message",
]
