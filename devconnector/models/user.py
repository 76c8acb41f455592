"""
User-related SQLAlchemy models.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, generate_id

if TYPE_CHECKING:
    from .post import Post
    from .profile import Profile


class User(Base):
    """
    User model created by the registration flow.

    Attributes:
        name: Display name
        email: Login email
        password: Password hash set at registration
        avatar: Avatar URL (gravatar at registration)
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password: Mapped[str | None] = mapped_column(String(255), nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(512), nullable=True)
    date: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    profile: Mapped["Profile"] = relationship("Profile", back_populates="user", uselist=False)
    posts: Mapped[list["Post"]] = relationship("Post", back_populates="user")
