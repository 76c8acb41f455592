"""
JWT helper utilities.

Tokens carry the authenticated identity as ``{"user": {"id": <user id>}}``.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import JWTError, jwt

from devconnector.config import Settings, get_settings


class TokenRejected(ValueError):
    """Token signature, expiry or claims did not check out."""


class VerifierMisconfigured(RuntimeError):
    """The server cannot verify tokens with its current configuration."""


def create_access_token(
    user_id: str,
    expires_seconds: int | None = None,
    settings: Settings | None = None,
) -> str:
    """
    Create a signed JWT access token with expiration and JTI.

    Args:
        user_id: Identity placed in the ``user.id`` claim.
        expires_seconds: Optional override for the expiration window.

    Returns:
        Encoded JWT string.
    """
    settings = settings or get_settings()
    expire = datetime.now(timezone.utc) + timedelta(
        seconds=expires_seconds or settings.access_token_expire_seconds
    )
    to_encode: Dict[str, Any] = {
        "user": {"id": user_id},
        "exp": expire,
        # JWT ID for token tracing
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings | None = None) -> Dict[str, Any]:
    """
    Decode and validate a JWT access token.

    Args:
        token: Encoded JWT string.

    Returns:
        The decoded ``user`` claim, e.g. ``{"id": "..."}``.

    Raises:
        TokenRejected: signature/expiry check failed or the identity claim is missing.
        VerifierMisconfigured: no secret is configured.
    """
    settings = settings or get_settings()
    if not settings.jwt_secret_key:
        raise VerifierMisconfigured("JWT secret is not configured")

    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise TokenRejected("Invalid token") from exc

    user = payload.get("user")
    if not isinstance(user, dict) or not user.get("id"):
        raise TokenRejected("Token has no user identity")
    return user
