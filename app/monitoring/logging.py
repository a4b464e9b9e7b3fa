"""
Structured logging configuration.

This module wires structlog into the standard library logging tree:
- Pretty console output with rich tracebacks in development
- JSON output everywhere else
- Request ID correlation through context variables
- Control characters escaped to prevent log injection

Examples
--------
>>> from logging import getLogger
>>> from app.monitoring import configure_logging
>>> configure_logging()
>>> logger = getLogger("app.services.blog")
>>> logger.info("Post created", extra={"post_id": "123"})
"""

from logging import StreamHandler, root
from typing import Any

from structlog import configure
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars
from structlog.dev import ConsoleRenderer, RichTracebackFormatter
from structlog.processors import (
    JSONRenderer,
    StackInfoRenderer,
    UnicodeDecoder,
    add_log_level,
    format_exc_info,
)
from structlog.stdlib import (
    BoundLogger,
    ExtraAdder,
    LoggerFactory,
    PositionalArgumentsFormatter,
    ProcessorFormatter,
    add_logger_name,
    filter_by_level,
)
from structlog.types import EventDict, Processor, WrappedLogger

from app.configs.settings import settings
from app.utils.helpers import iso_now

SENSITIVE_HEADERS: frozenset[str] = frozenset(
    {
        "authorization",
        "cookie",
        "x-api-key",
        "proxy-authorization",
    },
)

CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": ""})


def sanitize_log_message(message: str) -> str:
    r"""
    Escape control characters in a log message.

    Args:
        message: Raw log message that might contain injection attempts.

    Returns:
        Sanitized message with control characters escaped or removed.

    Examples:
    --------
    >>> sanitize_log_message("Hello\nWorld")
    'Hello\\nWorld'
    """
    return message.translate(CONTROL_CHARS)


def sanitize_headers(headers: dict[str, Any]) -> dict[str, Any]:
    """
    Return headers with sensitive values redacted.

    Examples:
    --------
    >>> sanitize_headers({"Authorization": "Bearer token123", "Content-Type": "json"})
    {'Authorization': '[REDACTED]', 'Content-Type': 'json'}
    """
    return {k: "[REDACTED]" if k.lower() in SENSITIVE_HEADERS else v for k, v in headers.items()}


def add_timestamp(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add an ISO 8601 UTC timestamp to the log entry."""
    event_dict["timestamp"] = iso_now()
    return event_dict


def sanitize_event_dict(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """
    Escape control characters and redact sensitive headers.

    Args:
        logger: The wrapped logger instance.
        method_name: The name of the logging method being called.
        event_dict: The event dictionary being built.

    Returns:
        Sanitized event dictionary.
    """
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = sanitize_log_message(value)
        elif key.lower() == "headers" and isinstance(value, dict):
            event_dict[key] = sanitize_headers(value)
    return event_dict


def get_renderer(*, colors: bool = True) -> Processor:
    """
    Pick the final renderer for the current environment.

    Args:
        colors: Whether to enable colors in ConsoleRenderer.

    Returns:
        ConsoleRenderer in development, JSONRenderer otherwise.
    """
    if settings.ENVIRONMENT == "development":
        return ConsoleRenderer(
            colors=colors,
            pad_level=False,
            exception_formatter=RichTracebackFormatter(),
        )
    return JSONRenderer()


def configure_logging() -> None:
    """Configure structured logging for the application."""
    # Hot reload re-runs this; drop the previous handler first.
    root.handlers.clear()
    root.setLevel(settings.LOG_LEVEL.upper())

    configure(
        processors=[
            filter_by_level,
            merge_contextvars,
            add_logger_name,
            add_log_level,
            PositionalArgumentsFormatter(),
            StackInfoRenderer(),
            format_exc_info,
            UnicodeDecoder(),
            ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=True,
    )

    console_handler = StreamHandler()
    console_handler.setFormatter(
        ProcessorFormatter(
            processors=[
                ProcessorFormatter.remove_processors_meta,
                sanitize_event_dict,
                get_renderer(colors=True),
            ],
            foreign_pre_chain=[
                merge_contextvars,
                add_logger_name,
                add_log_level,
                add_timestamp,
                ExtraAdder(),
            ],
        ),
    )
    root.addHandler(console_handler)


def bind_request_id(request_id: str) -> None:
    """
    Bind request ID to the current logging context.

    Examples:
    --------
    >>> bind_request_id("abc-123")
    >>> logger.info("Processing request")  # Will include request_id
    """
    bind_contextvars(request_id=request_id)


def clear_context() -> None:
    """Clear all bound context variables."""
    clear_contextvars()
