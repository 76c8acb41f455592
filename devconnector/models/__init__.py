"""
SQLAlchemy models for DevConnector.

Usage:
    from devconnector.models import User, Profile, Post
"""

from .base import Base, generate_id, is_valid_id
from .post import Post
from .profile import SOCIAL_NETWORKS, Profile
from .user import User

__all__ = [
    # Base
    "Base",
    "generate_id",
    "is_valid_id",
    # User
    "User",
    # Profile
    "Profile",
    "SOCIAL_NETWORKS",
    # Post
    "Post",
]
