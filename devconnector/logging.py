"""
Structured logging for DevConnector.

Every entry carries the bound request context (``request_id``, ``user_id``)
and has credential-like values masked before rendering. Development gets a
colored console renderer; every other environment gets one JSON object per
line.

Usage:
    from devconnector.logging import get_logger
    logger = get_logger("profile.service")
    logger.info("profile_upserted", user_id=user_id)
"""

import logging
import sys
import time
import uuid
from collections.abc import MutableMapping
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import EventDict, Processor

if TYPE_CHECKING:
    from .config import Settings

# Event keys whose values must never reach a log sink
SENSITIVE_KEYS = frozenset(
    {
        "authorization",
        "client_secret",
        "jwt_secret_key",
        "password",
        "token",
        "x-auth-token",
    }
)
REDACTED = "***"

# Probe endpoints are polled constantly; they log at debug
QUIET_PATHS = ("/health", "/health/ready")


def _redact_secrets(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    for key in event_dict:
        if key.lower() in SENSITIVE_KEYS and event_dict[key]:
            event_dict[key] = REDACTED
    return event_dict


def _add_app_context(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    event_dict["app"] = "devconnector"
    return event_dict


def get_processors(json_output: bool) -> list[Processor]:
    """Processor chain; the renderer depends on the environment."""
    shared: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        _redact_secrets,
        _add_app_context,
    ]
    if json_output:
        return shared + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return shared + [
        structlog.processors.StackInfoRenderer(),
        structlog.dev.ConsoleRenderer(exception_formatter=structlog.dev.plain_traceback),
    ]


def configure_logging(settings: "Settings | None" = None, force: bool = False) -> None:
    """
    Configure structlog over the stdlib root logger.

    The first call wins unless ``force`` is set, so building several apps in
    one process (as the tests do) keeps a single configuration.
    """
    if structlog.is_configured() and not force:
        return

    if settings is None:
        from .config import get_settings

        settings = get_settings()

    level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    json_output = not (settings.debug or settings.env == "development")
    structlog.configure(
        processors=get_processors(json_output),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger.

    The returned proxy resolves its configuration on first use, so module
    level loggers pick up whatever ``configure_logging`` installs later.
    """
    return structlog.get_logger(name)  # type: ignore[no-any-return]


# =============================================================================
# Context Management
# =============================================================================


def bind_context(**kwargs: Any) -> None:
    """Bind context variables included in all subsequent log entries."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_context_value(key: str, default: Any = "-") -> Any:
    """Read a bound context variable, e.g. the current request id."""
    return structlog.contextvars.get_contextvars().get(key, default)


# =============================================================================
# ASGI Integration
# =============================================================================


class RequestLoggingMiddleware:
    """
    Logs one entry when a request starts and one when it completes.

    The completion entry's level follows the status code (error for 5xx,
    warning for 4xx). The log context is cleared afterwards so nothing leaks
    into the next request served by the same worker.
    """

    def __init__(self, app):
        self.app = app
        self.logger = get_logger("http")

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        if get_context_value("request_id", None) is None:
            bind_context(request_id=uuid.uuid4().hex[:8])

        method = scope.get("method", "")
        path = scope.get("path", "")
        quiet = path in QUIET_PATHS
        start = time.perf_counter()
        status_code = 500

        (self.logger.debug if quiet else self.logger.info)("request_started", method=method, path=path)

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            if status_code >= 500:
                log = self.logger.error
            elif status_code >= 400:
                log = self.logger.warning
            else:
                log = self.logger.debug if quiet else self.logger.info
            log(
                "request_complete",
                method=method,
                path=path,
                status_code=status_code,
                duration_ms=round((time.perf_counter() - start) * 1000, 1),
            )
            clear_context()


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    "get_context_value",
    "RequestLoggingMiddleware",
]
