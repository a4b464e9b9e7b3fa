"""Tests for application errors and their HTTP handlers."""

from logging import getLogger

from fastapi.exceptions import RequestValidationError
from orjson import loads
from starlette.requests import Request

from app.errors import (
    BaseAppError,
    CacheCodecError,
    CacheDecompressionError,
    CacheKeyError,
    CacheSerializationError,
    DatabaseConnectionError,
    PostNotFoundError,
    RecordNotFoundError,
    create_exception_handler,
    validation_exception_handler,
)


def make_request(path: str = "/api/v1/blog") -> Request:
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": path,
            "headers": [],
            "query_string": b"",
            "client": ("127.0.0.1", 5000),
            "server": ("testserver", 80),
            "scheme": "http",
        },
    )


def test_post_not_found_detail() -> None:
    error = PostNotFoundError("abc")

    assert isinstance(error, RecordNotFoundError)
    assert error.status_code == 404
    assert str(error) == "Post with ID abc not found"


def test_status_codes() -> None:
    assert BaseAppError().status_code == 500
    assert DatabaseConnectionError().status_code == 500
    assert CacheKeyError().status_code == 500


async def test_handler_renders_detail_and_status() -> None:
    handler = create_exception_handler(getLogger("test"))

    response = await handler(make_request(), PostNotFoundError("abc"))

    assert response.status_code == 404
    assert loads(response.body) == {"detail": "Post with ID abc not found"}


async def test_handler_includes_extra_attributes() -> None:
    error = BaseAppError("Nope", 409)
    error.conflicting_id = "abc"
    handler = create_exception_handler(getLogger("test"))

    response = await handler(make_request(), error)

    assert response.status_code == 409
    assert loads(response.body) == {"detail": "Nope", "conflicting_id": "abc"}


async def test_validation_handler_returns_400_with_field_names() -> None:
    exc = RequestValidationError(
        [
            {"loc": ("body", "title"), "msg": "Field required", "type": "missing"},
            {
                "loc": ("query", "page"),
                "msg": "Input should be greater than or equal to 1",
                "type": "greater_than_equal",
                "input": "0",
                "ctx": {"ge": 1},
            },
        ],
    )

    response = await validation_exception_handler(make_request(), exc)

    assert response.status_code == 400
    body = loads(response.body)
    assert body["detail"] == "Validation failed"
    assert [error["field"] for error in body["errors"]] == ["title", "page"]
    assert body["errors"][1]["input"] == "0"
    assert body["errors"][1]["context"] == {"ge": 1}


def test_cache_key_error_names_operation_and_key() -> None:
    error = CacheKeyError("get", "post:abc")

    assert error.detail == "Cache get failed for key post:abc"
    assert error.extras == {"operation": "get", "key": "post:abc"}


def test_codec_errors_name_their_stage() -> None:
    assert str(CacheSerializationError()) == "Cannot serialize cache value"
    assert str(CacheDecompressionError()) == "Cannot decompress cache value"
    assert isinstance(CacheSerializationError(), CacheCodecError)


async def test_handler_for_foreign_exception_is_generic_500() -> None:
    handler = create_exception_handler(getLogger("test"))

    response = await handler(make_request(), ValueError("boom"))

    assert response.status_code == 500
    assert loads(response.body) == {"detail": "Internal Server Error"}
