"""
FastAPI application entry point.

Uses structured logging from devconnector.logging. The storage handle is built
here and passed down through ``app.state``; tests hand in their own.
"""

import httpx
from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from devconnector.config import Settings, get_settings
from devconnector.db import Database
from devconnector.logging import RequestLoggingMiddleware, configure_logging, get_logger

from .error_handlers import register_exception_handlers
from .middleware.request_id import RequestIDMiddleware
from .routers import profile as profile_router

logger = get_logger("api")


def _log_config_warnings(settings: Settings) -> None:
    """Surface insecure or incomplete configuration at startup."""
    errors, warnings = settings.validate_production_config()
    for warning in warnings:
        logger.warning("config_warning", message=warning)
    for error in errors:
        if settings.is_production:
            logger.error("config_error", message=error)
        else:
            logger.warning("config_warning", message=error)
    if errors and settings.is_production:
        raise RuntimeError("Invalid production configuration: " + "; ".join(errors))


def create_app(
    settings: Settings | None = None,
    database: Database | None = None,
    github_transport: httpx.BaseTransport | None = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to run with. Defaults to the environment.
        database: Storage handle. Defaults to one built from ``settings.database_url``.
        github_transport: Optional httpx transport for the repository lookup.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(title=settings.app_name, debug=settings.debug)
    app.state.settings = settings
    app.state.database = database or Database(settings=settings)
    app.state.github_transport = github_transport

    # CORS middleware - restricted to the methods and headers the API uses
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "X-Requested-With",
            settings.auth_header_name,
        ],
    )

    # Structured request logging; RequestIDMiddleware wraps it so the id is bound first
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Exception handlers
    register_exception_handlers(app)

    @app.on_event("startup")
    async def startup_event():
        """Initialize services on startup."""
        logger.info("app_startup", app_name=settings.app_name)
        _log_config_warnings(settings)
        app.state.database.create_all_tables()
        logger.info("database_initialized")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on shutdown."""
        logger.info("app_shutdown")
        app.state.database.dispose()

    @app.get("/health", tags=["health"])
    def health_check():
        """
        Health check endpoint (liveness probe).

        Returns minimal information to avoid exposing infrastructure details.
        """
        return {"status": "ok"}

    @app.get("/health/ready", tags=["health"])
    def readiness_check():
        """
        Readiness check endpoint.

        Returns 200 if the database answers, 503 if not.
        """
        result = app.state.database.health_check()
        checks = {"database": result["healthy"]}

        if not result["healthy"]:
            logger.warning("readiness_check_failed", error=result["error"])
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "not_ready", "checks": checks},
            )

        return {"status": "ready", "checks": checks}

    app.include_router(profile_router.router, prefix=settings.api_prefix)

    return app
