"""
Request-scoped access to the application's storage handle and settings.

The app factory stores a ``Database`` and ``Settings`` on ``app.state``;
these dependencies hand them to routes so nothing reaches for a global.
"""

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from devconnector.config import Settings
from devconnector.db import Database

from .services import ProfileService


def get_database(request: Request) -> Database:
    """The Database built by ``create_app``."""
    return request.app.state.database


def get_settings_from_app(request: Request) -> Settings:
    """The Settings the app was created with."""
    return request.app.state.settings


def get_db(database: Database = Depends(get_database)) -> Iterator[Session]:
    """
    FastAPI dependency for database sessions.

    Services commit their own writes; the session is rolled back if the
    route raises and closed when the request ends.
    """
    with database.session() as session:
        yield session


def get_profile_service(db: Session = Depends(get_db)) -> ProfileService:
    """Profile service bound to this request's session."""
    return ProfileService(db)
