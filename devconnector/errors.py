"""
Error taxonomy shared by the service layer and the HTTP error handlers.

Every error carries the message that is safe to show the caller and the HTTP
status it maps to. Internal details are logged, never attached here.
"""

from typing import Any


class APIError(Exception):
    """Base exception for API errors."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationFailed(APIError):
    """Missing or malformed request fields, reported as a list."""

    status_code = 400

    def __init__(self, errors: list[dict[str, Any]]):
        self.errors = errors
        super().__init__("Validation failed")

    @classmethod
    def for_field(cls, param: str, msg: str, value: Any = None) -> "ValidationFailed":
        return cls([{"msg": msg, "param": param, "location": "body", "value": value}])


class Unauthorized(APIError):
    """Missing or rejected credential."""

    status_code = 401


class NotFound(APIError):
    """No matching profile, user or upstream resource.

    Profile routes answer 400 for a missing profile; the repository lookup
    answers 404. Callers pass the status they need.
    """

    status_code = 400


class InvalidArgument(APIError):
    """An identifier that is not syntactically valid."""

    status_code = 400


class InternalError(APIError):
    """Unexpected fault. The message returned to the caller is always generic."""

    status_code = 500

    def __init__(self, message: str = "Server Error"):
        super().__init__(message)


__all__ = [
    "APIError",
    "ValidationFailed",
    "Unauthorized",
    "NotFound",
    "InvalidArgument",
    "InternalError",
]
