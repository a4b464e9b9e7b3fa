"""
Serialization and compression utilities for caching.

Uses orjson for high-performance JSON serialization/deserialization.
"""

from base64 import b64decode, b64encode
from binascii import Error as BinasciiError
from gzip import BadGzipFile
from gzip import compress as gzip_compress
from gzip import decompress as gzip_decompress
from logging import getLogger
from typing import Any
from zlib import error as ZlibError

from orjson import OPT_NON_STR_KEYS, JSONDecodeError, JSONEncodeError
from orjson import dumps as orjson_dumps
from orjson import loads as orjson_loads

from app.configs import file_logger
from app.errors.cache import (
    CacheCompressionError,
    CacheDecompressionError,
    CacheDeserializationError,
    CacheSerializationError,
)

logger = file_logger(getLogger(__name__))

COMPRESSION_MARKER = "\x00GZIP\x00"


def serialize(value: object) -> str:
    """
    Serialize value to JSON string.

    Values orjson cannot encode natively (UUIDs inside custom objects,
    Decimals, ...) fall back to ``str``.

    Args:
        value: Value to serialize.

    Returns:
        JSON serialized string.

    Raises:
        CacheSerializationError: If serialization fails.
    """
    try:
        return orjson_dumps(value, default=str, option=OPT_NON_STR_KEYS).decode("utf-8")
    except (JSONEncodeError, TypeError, ValueError) as e:
        logger.exception("Serialization failed")
        raise CacheSerializationError from e


def deserialize(value: str) -> Any:  # noqa: ANN401
    """
    Deserialize JSON string to value.

    Args:
        value: JSON string to deserialize.

    Returns:
        Deserialized value.

    Raises:
        CacheDeserializationError: If deserialization fails.
    """
    try:
        return orjson_loads(value)
    except (JSONDecodeError, TypeError, ValueError) as e:
        logger.exception("Deserialization failed")
        raise CacheDeserializationError from e


def compress(data: str) -> str:
    """
    Compress data using gzip.

    Args:
        data: Data to compress.

    Returns:
        Compressed data as base64-encoded string with marker.

    Raises:
        CacheCompressionError: If compression fails.
    """
    try:
        compressed = gzip_compress(data.encode("utf-8"))
        return COMPRESSION_MARKER + b64encode(compressed).decode("utf-8")
    except (UnicodeError, OSError) as e:
        logger.exception("Compression failed")
        raise CacheCompressionError from e


def decompress(data: str) -> str:
    """
    Decompress gzip data.

    Strings without the compression marker are returned unchanged.

    Args:
        data: Compressed base64-encoded data with marker.

    Returns:
        Decompressed string.

    Raises:
        CacheDecompressionError: If decompression fails.
    """
    if not data.startswith(COMPRESSION_MARKER):
        return data
    try:
        encoded = data[len(COMPRESSION_MARKER) :]
        compressed = b64decode(encoded.encode("utf-8"), validate=True)
        return gzip_decompress(compressed).decode("utf-8")
    except (BinasciiError, BadGzipFile, ZlibError, EOFError, UnicodeError, OSError) as e:
        logger.exception("Decompression failed")
        raise CacheDecompressionError from e


def do_compress(data: str, threshold: int) -> bool:
    """
    Determine if data should be compressed.

    Args:
        data: Data to check.
        threshold: Size threshold in bytes.

    Returns:
        True if data size exceeds threshold.
    """
    return len(data.encode("utf-8")) > threshold
