# app/middleware/middleware.py
"""
Middleware components for the Blog API.

This module contains middleware for security headers, request logging and
CORS handling, plus the lifespan event handler that initializes and cleans
up the database and the cache.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import getLogger
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.configs import file_logger, settings
from app.db import close_db, init_db
from app.managers.cache_manager import CacheManager
from app.monitoring.logging import bind_request_id, clear_context, configure_logging
from app.utils.helpers import get_summary, host

REQUEST_ID_HEADER = "X-Request-ID"

logger = file_logger(getLogger(__name__))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown events with service initialization."""
    configure_logging()
    logger.info(f"Starting {app.title} ({settings.ENVIRONMENT})...")

    cache_manager: CacheManager = app.state.cache_manager
    try:
        if settings.DATABASE_SYNCHRONIZE:
            await init_db()
        await cache_manager.initialize()

        logger.info("Services initialized successfully")
        logger.info(f"  - API: http://localhost:{settings.PORT}{settings.api_root}/blog")
        logger.info(f"  - API Documentation: http://localhost:{settings.PORT}{settings.docs_url}")
        logger.info(f"  - Health Check: http://localhost:{settings.PORT}/health")
    except Exception:
        logger.exception("Failed to initialize services")
        raise

    yield

    logger.info(f"Shutting down {app.title}...")
    try:
        await cache_manager.shutdown()
        await close_db()
        logger.info("Services cleaned up successfully")
    except Exception:
        logger.exception("Error during service cleanup")


def configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    if frontend_url := settings.PRODUCTION_FRONTEND_URL:
        allowed_origins.append(frontend_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Bind a request id, then log request summary and timing information."""

        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        bind_request_id(request_id)

        start_time = perf_counter()
        route_info = get_summary(request) or f"{request.method} {request.url.path}"
        logger.info(f"Request: {route_info}, from ip: {host(request)}")

        try:
            response = await call_next(request)
            duration = perf_counter() - start_time
            logger.info(
                f"Response: {response.status_code} for {request.method} {request.url.path} "
                f"in {duration:.3f}s",
            )
        finally:
            clear_context()

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to all responses."""

        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response
