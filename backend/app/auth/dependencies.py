"""
Authentication dependencies for FastAPI routes.

The credential is read from the configured header (``x-auth-token`` by
default); an ``Authorization: Bearer`` header is accepted as a fallback for
API clients. Verification never touches the database.
"""

from dataclasses import dataclass

from fastapi import Depends, Request

from devconnector.config import Settings
from devconnector.errors import InternalError, Unauthorized
from devconnector.logging import bind_context, get_logger

from ..database import get_settings_from_app
from .jwt import TokenRejected, VerifierMisconfigured, decode_access_token

logger = get_logger("auth")


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, as decoded from the token."""

    id: str


def get_token_from_request(
    request: Request,
    settings: Settings = Depends(get_settings_from_app),
) -> str:
    """
    Extract the JWT from the request.

    Checks in order:
    1. The configured credential header
    2. Authorization header (Bearer token)
    """
    token = request.headers.get(settings.auth_header_name)
    if token:
        return token.strip()

    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()

    raise Unauthorized("No token, authorization denied")


async def get_current_identity(
    request: Request,
    token: str = Depends(get_token_from_request),
    settings: Settings = Depends(get_settings_from_app),
) -> Identity:
    """
    Verify the caller's token and attach the identity to the request.

    Declared async so it runs on the request task: the ``user_id`` bound
    here stays in the log context for the route and the request log.

    Steps:
    1) Extract token from the credential header.
    2) Verify signature and expiry, read the ``user.id`` claim.
    3) Store the identity on ``request.state.user`` and the log context.
    """
    try:
        claims = decode_access_token(token, settings)
    except TokenRejected:
        raise Unauthorized("Token is not valid") from None
    except VerifierMisconfigured as e:
        logger.error("token_verifier_misconfigured", error=str(e))
        raise InternalError() from e
    except Exception as e:
        logger.exception("token_verifier_failed", error=str(e), error_type=type(e).__name__)
        raise InternalError() from e

    identity = Identity(id=str(claims["id"]))
    request.state.user = identity
    bind_context(user_id=identity.id)
    return identity
