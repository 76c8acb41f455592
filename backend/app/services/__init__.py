"""
Backend services for DevConnector.
"""

from . import profile_service
from .profile_service import ProfileService

__all__ = [
    "profile_service",
    "ProfileService",
]
