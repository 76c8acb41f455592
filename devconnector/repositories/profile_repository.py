"""Developer profile repository."""

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload

from devconnector.models import Profile

from .base import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    """Repository for Profile operations."""

    model = Profile

    def get_by_user_id(self, user_id: str) -> Profile | None:
        """Get profile by owning user ID, with the owner loaded."""
        return (
            self.session.query(Profile)
            .options(joinedload(Profile.user))
            .filter(Profile.user_id == user_id)
            .first()
        )

    def list_with_users(self) -> list[Profile]:
        """Get every profile with its owner loaded."""
        return self.session.query(Profile).options(joinedload(Profile.user)).all()

    def replace(self, user_id: str, fields: dict[str, Any]) -> Profile:
        """
        Create or replace the profile owned by ``user_id``.

        Every key in ``fields`` is written; keys the caller leaves out keep
        their current value (new profiles get the column defaults). The
        insert runs in a savepoint so a concurrent create for the same user
        falls back to replacing the row that won.
        """
        profile = self.get_by_user_id(user_id)

        if profile is None:
            try:
                with self.session.begin_nested():
                    profile = Profile(user_id=user_id, **fields)
                    self.session.add(profile)
                    self.session.flush()
                return profile
            except IntegrityError:
                profile = self.get_by_user_id(user_id)
                if profile is None:
                    raise

        for key, value in fields.items():
            setattr(profile, key, value)
        self.session.flush()
        return profile

    def save(self, profile: Profile) -> Profile:
        """Flush pending changes on an already loaded profile."""
        self.session.add(profile)
        self.session.flush()
        return profile

    def delete_by_user_id(self, user_id: str) -> bool:
        """Delete the profile owned by a user. Returns False if there was none."""
        deleted = (
            self.session.query(Profile)
            .filter(Profile.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.session.flush()
        return bool(deleted)
