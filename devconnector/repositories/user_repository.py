"""User repository."""

from devconnector.models import User

from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User operations."""

    model = User
