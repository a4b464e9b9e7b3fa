"""Cache failures raised by the cache gateway and its codec."""

from logging import getLogger

from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from app.configs import file_logger
from app.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class CacheExceptionError(BaseAppError):
    """Base exception for cache operations."""

    def __init__(self, detail: str = "Cache exception occurred") -> None:
        super().__init__(detail, HTTP_500_INTERNAL_SERVER_ERROR)


class CacheKeyError(CacheExceptionError):
    """
    A cache operation failed against the backing store.

    Attributes:
        operation: Name of the failed operation (``get``, ``set``, ...).
        key: Logical key involved, when the operation targets one.
    """

    def __init__(self, operation: str = "access", key: str | None = None) -> None:
        detail = f"Cache {operation} failed"
        if key is not None:
            detail = f"{detail} for key {key}"
        super().__init__(detail)
        self.operation = operation
        self.key = key


class CacheCodecError(CacheExceptionError):
    """A value could not be converted to or from its stored text form."""

    stage: str = "encode"

    def __init__(self) -> None:
        super().__init__(f"Cannot {self.stage} cache value")


class CacheSerializationError(CacheCodecError):
    stage = "serialize"


class CacheDeserializationError(CacheCodecError):
    stage = "deserialize"


class CacheCompressionError(CacheCodecError):
    stage = "compress"


class CacheDecompressionError(CacheCodecError):
    stage = "decompress"


cache_exception_handler = create_exception_handler(logger)
