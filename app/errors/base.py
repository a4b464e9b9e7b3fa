from collections.abc import Awaitable, Callable
from logging import Logger
from typing import Any

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from app.utils.helpers import host

# Low-level failures a backing store may leak; OSError covers connection,
# timeout and permission errors.
BASE_EXCEPTION = (OSError, RuntimeError, MemoryError)

_RESERVED_FIELDS = frozenset({"status_code", "detail"})


class BaseAppError(Exception):
    """Error carrying the HTTP status and detail it is answered with."""

    def __init__(
        self,
        detail: str = "Internal Server Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        return self.detail

    @property
    def extras(self) -> dict[str, Any]:
        """Instance attributes other than the status and detail."""
        return {k: v for k, v in vars(self).items() if k not in _RESERVED_FIELDS}


def create_exception_handler(
    logger: Logger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create an exception handler rendering ``BaseAppError`` as JSON.

    The body is ``{"detail": ...}`` plus any extra attributes set on the
    error. Server-side failures are logged at ERROR, client errors at WARNING.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        if isinstance(exc, BaseAppError):
            status_code, detail, extras = exc.status_code, exc.detail, exc.extras
        else:
            status_code, detail, extras = HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error", {}

        log = logger.error if status_code >= HTTP_500_INTERNAL_SERVER_ERROR else logger.warning
        log("%s for ip: %s at endpoint %s", detail, host(request), request.url.path)

        return ORJSONResponse(content={"detail": detail, **extras}, status_code=status_code)

    return handler
