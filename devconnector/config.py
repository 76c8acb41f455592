"""
DevConnector settings, read from the environment and an optional ``.env``.

Usage:
    from devconnector.config import get_settings
    settings = get_settings()

Tests and the app factory may also build ``Settings(...)`` directly and pass
it down; nothing below caches a settings object except ``get_settings``.
"""

import warnings
from functools import lru_cache
from typing import List

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_SECRET_LENGTH = 32

# Placeholder secrets seen in tutorials and sample configs
WEAK_JWT_SECRETS = frozenset(
    {
        "change_me",
        "changeme",
        "secret",
        "your-secret-key",
        "jwt-secret",
        "mysecrettoken",
        "development",
        "test",
    }
)


def jwt_secret_problem(secret: str) -> str | None:
    """Describe what is wrong with ``secret``, or None if it is acceptable."""
    if secret.lower() in WEAK_JWT_SECRETS:
        return f"JWT_SECRET_KEY is a placeholder/default value ('{secret}')"
    if len(secret) < MIN_SECRET_LENGTH:
        return f"JWT_SECRET_KEY must be at least {MIN_SECRET_LENGTH} characters (got {len(secret)})"
    return None


class Settings(BaseSettings):
    """
    Application settings.

    Required for production:
        - JWT_SECRET_KEY (at least 32 characters, not a placeholder)
        - DATABASE_URL pointing at a server database

    Recommended:
        - GITHUB_CLIENT_ID / GITHUB_CLIENT_SECRET (raises the GitHub rate limit)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # App settings
    app_name: str = Field(default="DevConnector", validation_alias="APP_NAME")
    api_prefix: str = Field(default="/api", validation_alias="API_PREFIX")
    debug: bool = Field(default=False, validation_alias="DEBUG")
    env: str = Field(default="development", validation_alias="ENV")

    # Database
    database_url: str = Field(default="sqlite:///devconnector.db", validation_alias="DATABASE_URL")
    db_pool_size: int = Field(default=10, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=20, validation_alias="DB_MAX_OVERFLOW")
    db_pool_pre_ping: bool = Field(default=True, validation_alias="DB_POOL_PRE_PING")

    # Credentials
    jwt_secret_key: str = Field(default="CHANGE_ME", validation_alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", validation_alias="JWT_ALGORITHM")
    access_token_expire_seconds: int = Field(default=360000, validation_alias="ACCESS_TOKEN_EXPIRE_SECONDS")
    auth_header_name: str = Field(default="x-auth-token", validation_alias="AUTH_HEADER_NAME")

    # GitHub repository lookup
    github_client_id: str = Field(default="", validation_alias="GITHUB_CLIENT_ID")
    github_client_secret: str = Field(default="", validation_alias="GITHUB_CLIENT_SECRET")
    github_api_base: str = Field(default="https://api.github.com", validation_alias="GITHUB_API_BASE")
    github_timeout_seconds: float = Field(default=10.0, validation_alias="GITHUB_TIMEOUT_SECONDS")

    # Comma-separated list of browser origins
    cors_allowed_origins: str = Field(default="http://localhost:3000", validation_alias="CORS_ALLOWED_ORIGINS")

    @field_validator("api_prefix")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v

    @field_validator("jwt_secret_key")
    @classmethod
    def check_jwt_secret(cls, v: str, info: ValidationInfo) -> str:
        """Refuse weak secrets in production; warn about them elsewhere."""
        problem = jwt_secret_problem(v)
        if problem is None:
            return v

        env = str(info.data.get("env", "development")).lower()
        if env in ("production", "prod"):
            raise ValueError(
                f"{problem}. Generate a key with: "
                "python -c \"import secrets; print(secrets.token_urlsafe(48))\""
            )
        warnings.warn(problem, UserWarning, stacklevel=2)
        return v

    @property
    def is_production(self) -> bool:
        return self.env.lower() in ("production", "prod")

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

    def validate_production_config(self) -> tuple[List[str], List[str]]:
        """
        Check the settings a deployment needs.

        Returns:
            (errors, warnings). Startup refuses to run in production with errors.
        """
        errors: List[str] = []
        advisories: List[str] = []

        problem = jwt_secret_problem(self.jwt_secret_key)
        if problem:
            errors.append(problem)

        if not self.github_client_id or not self.github_client_secret:
            advisories.append(
                "GITHUB_CLIENT_ID/GITHUB_CLIENT_SECRET not set - repository lookups "
                "will use the unauthenticated GitHub rate limit."
            )

        if self.database_url.startswith("sqlite"):
            advisories.append("DATABASE_URL points at SQLite; use a server database in production.")

        return errors, advisories


@lru_cache
def get_settings() -> Settings:
    """Settings from the environment, built once per process."""
    return Settings()


__all__ = ["Settings", "get_settings", "jwt_secret_problem"]
