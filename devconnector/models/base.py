"""
Base model class for SQLAlchemy ORM.

Re-exports the Base class from the database module for convenience.
"""

import uuid

from devconnector.db import Base


def generate_id() -> str:
    """Generate a new document identifier."""
    return str(uuid.uuid4())


def is_valid_id(value: str) -> bool:
    """
    Return True when ``value`` has the shape of a generated identifier.

    Only the canonical hyphenated form counts; braces, ``urn:uuid:`` and bare
    hex also parse as UUIDs but can never match a stored id.
    """
    value = str(value)
    try:
        return str(uuid.UUID(value)) == value.lower()
    except ValueError:
        return False


__all__ = ["Base", "generate_id", "is_valid_id"]
