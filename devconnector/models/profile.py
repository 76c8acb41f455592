"""
Developer profile SQLAlchemy model.

Experience and education entries are embedded in the profile row as JSON
arrays, so every change to a profile is a single-row write.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, generate_id

if TYPE_CHECKING:
    from .user import User


# Social networks a profile may link to
SOCIAL_NETWORKS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


class Profile(Base):
    """
    Developer profile, one per user.

    Attributes:
        status: Free-text professional status (required)
        skills: Ordered list of trimmed skill names (required, non-empty)
        social: Network name -> URL, keys limited to SOCIAL_NETWORKS
        experience: Embedded experience entries, most recent first
        education: Embedded education entries, most recent first
        date: Timestamp of the last write
    """

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), unique=True, index=True)
    company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    website: Mapped[str | None] = mapped_column(String(512), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(String(255))
    skills: Mapped[list[str]] = mapped_column(JSON, default=list)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    githubusername: Mapped[str | None] = mapped_column(String(255), nullable=True)
    social: Mapped[dict[str, str]] = mapped_column(JSON, default=dict)
    experience: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    education: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    date: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="profile")
