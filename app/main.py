# app/main.py

"""Blog API - CRUD for blog posts with a Redis cache-aside layer for FastAPI."""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_200_OK, HTTP_503_SERVICE_UNAVAILABLE
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from app.configs import settings
from app.db import ping_database
from app.errors import (
    CacheExceptionError,
    DatabaseError,
    cache_exception_handler,
    database_exception_handler,
    validation_exception_handler,
)
from app.managers import cache_manager
from app.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from app.monitoring import HealthChecker
from app.routes import blog_router
from app.schemas import HealthResponse, RootResponse
from app.utils.helpers import iso_now, uptime_seconds

DESCRIPTION = "A blog API with CRUD operations, pagination, validation and Redis caching"

app = FastAPI(
    title=settings.APP_NAME,
    description=DESCRIPTION,
    version=settings.APP_VERSION,
    lifespan=lifespan,
    docs_url=settings.docs_url,
    default_response_class=ORJSONResponse,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

app.state.cache_manager = cache_manager

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

app.include_router(blog_router)

errors = [
    (CacheExceptionError, cache_exception_handler),
    (DatabaseError, database_exception_handler),
    (RequestValidationError, validation_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]


@app.get(
    "/",
    tags=["🏠 Root"],
    summary="Service information",
    response_model=RootResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "name": "Blog API",
                        "version": "1.0.0",
                        "description": DESCRIPTION,
                        "status": "running",
                        "features": ["CRUD operations", "Pagination"],
                        "endpoints": {"docs": "/docs", "health": "/health"},
                        "timestamp": "2026-10-19T08:30:00+00:00",
                    },
                },
            },
        },
    },
    operation_id="root_info",
)
async def root() -> RootResponse:
    """
    Root endpoint.

    Returns
    -------
    RootResponse
        Static service metadata with the current timestamp.

    Examples
    --------
    Request
        GET /
    Response
        200 OK
        {"name": "Blog API", "version": "1.0.0", "status": "running", ...}
    """
    return RootResponse(
        name=settings.APP_NAME,
        version=settings.APP_VERSION,
        description=DESCRIPTION,
        status="running",
        features=[
            "CRUD operations for blog posts",
            "Pagination support",
            "Input validation",
            "Redis caching",
            "PostgreSQL database",
            "API documentation",
        ],
        endpoints={
            "docs": settings.docs_url,
            "health": "/health",
            "ready": "/health/ready",
            "api": settings.api_root,
            "blog": f"{settings.api_root}/blog",
        },
        timestamp=iso_now(),
    )


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Liveness check",
    response_model=HealthResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "status": "ok",
                        "timestamp": "2026-10-19T08:30:00+00:00",
                        "uptime": 12.345,
                        "environment": "development",
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
async def health_check() -> HealthResponse:
    """
    Liveness endpoint; touches no dependency.

    Returns
    -------
    HealthResponse
        Status, timestamp, process uptime and environment.
    """
    return HealthResponse(
        status="ok",
        timestamp=iso_now(),
        uptime=uptime_seconds(),
        environment=settings.ENVIRONMENT,
    )


@app.get(
    "/health/ready",
    tags=["🩺 Health"],
    summary="Readiness check",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "status": "ready",
                        "timestamp": "2026-10-19T08:30:00+00:00",
                        "version": "1.0.0",
                        "checks": {
                            "database": {"status": "pass", "response_ms": 3},
                            "cache": {"status": "pass", "response_ms": 1, "backend": "redis"},
                        },
                    },
                },
            },
        },
        503: {"description": "A dependency is unavailable"},
    },
    operation_id="readiness_check",
)
async def readiness_check() -> ORJSONResponse:
    """
    Readiness endpoint probing the database and the cache.

    Returns
    -------
    ORJSONResponse
        Per-component results; `503` when any component fails.
    """
    checker = HealthChecker(app.state.cache_manager, ping_database, version=settings.APP_VERSION)
    status = await checker.check_readiness()
    return ORJSONResponse(
        content=status.to_dict(),
        status_code=HTTP_200_OK if status.is_healthy else HTTP_503_SERVICE_UNAVAILABLE,
    )
