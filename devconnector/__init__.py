"""
DevConnector Core Library.

This package provides the core functionality for the DevConnector profile API,
including configuration, database management, models, repositories, the GitHub
repository lookup and logging.

Usage:
    # Database
    from devconnector.db import Database, Base
    from devconnector.models import User, Profile, Post
    from devconnector.repositories import ProfileRepository

    # Config
    from devconnector.config import get_settings, Settings

    # Logging
    from devconnector.logging import get_logger, configure_logging
"""

__version__ = "1.0.0"

# Users should import directly from submodules:
#   from devconnector.db import Database
#   from devconnector.config import get_settings
#   from devconnector.logging import get_logger
