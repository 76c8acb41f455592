"""
Repository pattern implementations for data access.

Repositories wrap a caller-supplied session; they flush but never commit, so
the unit of work belongs to whoever opened the session.

Usage:
    from devconnector.repositories import ProfileRepository

    with database.session() as session:
        profile = ProfileRepository(session).get_by_user_id(user_id)
"""

from .base import BaseRepository
from .post_repository import PostRepository
from .profile_repository import ProfileRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "PostRepository",
    "ProfileRepository",
    "UserRepository",
]
