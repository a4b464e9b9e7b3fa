from app.errors.base import BASE_EXCEPTION, BaseAppError, create_exception_handler
from app.errors.cache import (
    CacheCodecError,
    CacheCompressionError,
    CacheDecompressionError,
    CacheDeserializationError,
    CacheExceptionError,
    CacheKeyError,
    CacheSerializationError,
    cache_exception_handler,
)
from app.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    PostNotFoundError,
    RecordNotFoundError,
    database_exception_handler,
)
from app.errors.validation import validation_exception_handler

__all__ = [
    "BASE_EXCEPTION",
    "BaseAppError",
    "CacheCodecError",
    "CacheCompressionError",
    "CacheDecompressionError",
    "CacheDeserializationError",
    "CacheExceptionError",
    "CacheKeyError",
    "CacheSerializationError",
    "DatabaseConnectionError",
    "DatabaseError",
    "PostNotFoundError",
    "RecordNotFoundError",
    "cache_exception_handler",
    "create_exception_handler",
    "database_exception_handler",
    "validation_exception_handler",
]
