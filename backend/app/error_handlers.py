"""
Custom exception handlers for FastAPI.

Response shapes:
- ``{"msg": "..."}`` for single errors
- ``{"errors": [{"msg", "param", "location", "value"}]}`` for validation errors

Security:
- Request IDs are logged server-side for tracing but NOT exposed to clients
- Generic error messages for 500 errors to prevent information disclosure
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from devconnector.errors import APIError, ValidationFailed
from devconnector.logging import get_context_value, get_logger

logger = get_logger("backend.errors")

SERVER_ERROR = "Server Error"


def _msg(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"msg": message})


def request_errors_to_list(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Flatten pydantic error records into ``{msg, param, location, value}``.

    ``loc`` is ``("body", "status")`` for body fields, ``("path", "user_id")``
    for path parameters, and just ``("body",)`` for a missing or non-object body.
    """
    flattened = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        location = loc[0] if loc else "body"
        param = ".".join(loc[1:]) if len(loc) > 1 else ""
        flattened.append(
            {
                "msg": error.get("msg", "Invalid value"),
                "param": param,
                "location": location,
                "value": error.get("input"),
            }
        )
    return flattened


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationFailed)
    async def validation_failed_handler(request: Request, exc: ValidationFailed):
        logger.warning(
            "validation_failed",
            errors=exc.errors,
            path=request.url.path,
            request_id=get_context_value("request_id"),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=jsonable_encoder({"errors": exc.errors}),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = request_errors_to_list(list(exc.errors()))
        logger.warning(
            "validation_error",
            errors=[(e["param"], e["msg"]) for e in errors],
            path=request.url.path,
            request_id=get_context_value("request_id"),
        )
        return JSONResponse(status_code=400, content=jsonable_encoder({"errors": errors}))

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "api_error",
            error_type=type(exc).__name__,
            message=exc.message,
            status_code=exc.status_code,
            path=request.url.path,
            request_id=get_context_value("request_id"),
        )
        message = exc.message if exc.status_code < 500 else SERVER_ERROR
        return _msg(message, exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.warning(
            "http_exception",
            detail=exc.detail,
            status_code=exc.status_code,
            request_id=get_context_value("request_id"),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"msg": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        # Store faults are logged in full but never echoed to the caller
        logger.error(
            "store_fault",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            request_id=get_context_value("request_id"),
        )
        return _msg(SERVER_ERROR, 500)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            request_id=get_context_value("request_id"),
        )
        return _msg(SERVER_ERROR, 500)
