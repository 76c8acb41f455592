"""
Profile management service.

``ProfileService`` is constructed per request around the session it should
use; it owns every write to profile documents, including their embedded
experience and education lists. Each write operation commits before
it returns, so a store fault surfaces while the route can still answer 500.
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from devconnector.errors import InvalidArgument, NotFound, ValidationFailed
from devconnector.logging import get_logger
from devconnector.models import SOCIAL_NETWORKS, Profile, generate_id, is_valid_id
from devconnector.repositories import PostRepository, ProfileRepository, UserRepository

from ..schemas import EducationRequest, ExperienceRequest, ProfileUpsertRequest

logger = get_logger("profile.service")

# Profile attributes copied verbatim from the upsert payload
PROFILE_TEXT_FIELDS = ("company", "website", "location", "status", "bio", "githubusername")


def normalize_skills(skills: str | list[str]) -> list[str]:
    """
    Turn a skills value into an ordered list of trimmed names.

    "Go, Rust,  C++" -> ["Go", "Rust", "C++"]. Lists are trimmed item-wise.
    Empty items are dropped in both cases.
    """
    items = skills.split(",") if isinstance(skills, str) else skills
    return [item.strip() for item in items if item and item.strip()]


def build_social(payload: ProfileUpsertRequest) -> dict[str, str]:
    """Collect the recognized social links that were actually supplied."""
    social = {}
    for network in SOCIAL_NETWORKS:
        value = getattr(payload, network)
        if value and value.strip():
            social[network] = value.strip()
    return social


def _without_entry(entries: list[dict[str, Any]], entry_id: str) -> list[dict[str, Any]]:
    return [entry for entry in entries if entry.get("_id") != entry_id]


class ProfileService:
    """Read/create/update/delete operations over profile documents."""

    def __init__(self, session: Session):
        self.session = session
        self.profiles = ProfileRepository(session)
        self.users = UserRepository(session)
        self.posts = PostRepository(session)

    def _require_profile(self, user_id: str) -> Profile:
        profile = self.profiles.get_by_user_id(user_id)
        if profile is None:
            raise NotFound("There is no profile for this user")
        return profile

    # -------------------------------------------------------------------------
    # Profile documents
    # -------------------------------------------------------------------------

    def get_own_profile(self, user_id: str) -> Profile:
        """Profile owned by the caller, with the owner joined."""
        return self._require_profile(user_id)

    def upsert_profile(self, user_id: str, payload: ProfileUpsertRequest) -> Profile:
        """
        Create the caller's profile or replace its attributes.

        Attributes carried by the payload are written in full, so an omitted
        optional field is cleared. Embedded experience and education lists
        are managed by their own operations and survive the replace.
        """
        fields: dict[str, Any] = {
            name: getattr(payload, name) for name in PROFILE_TEXT_FIELDS
        }
        fields["skills"] = normalize_skills(payload.skills or [])
        if not fields["skills"]:
            # "," passes the presence check but names no skill
            raise ValidationFailed.for_field("skills", "Skills is required", payload.skills)
        fields["social"] = build_social(payload)
        fields["date"] = datetime.now(timezone.utc)

        if self.users.get_by_id(user_id) is None:
            raise NotFound("User not found")

        profile = self.profiles.replace(user_id, fields)
        self.session.commit()
        logger.info("profile_upserted", user_id=user_id, skills_count=len(fields["skills"]))
        return profile

    def list_profiles(self) -> list[Profile]:
        """Every profile with its owner joined."""
        return self.profiles.list_with_users()

    def get_profile_by_user_id(self, user_id: str) -> Profile:
        """
        Public profile lookup.

        Raises:
            InvalidArgument: ``user_id`` is not a well-formed identifier
                (checked before the store is queried).
            NotFound: the user has no profile.
        """
        if not is_valid_id(user_id):
            raise InvalidArgument("Invalid ID")

        profile = self.profiles.get_by_user_id(user_id)
        if profile is None:
            raise NotFound("Profile not found")
        return profile

    def delete_own_profile_cascade(self, user_id: str) -> None:
        """
        Delete the caller's posts, then profile, then user record.

        The steps run in order and are committed together once the last one
        succeeds. If one fails nothing is committed, and the failing step and the steps already completed are logged before the
        error propagates, so a partial cascade is distinguishable in the logs
        from a request that failed outright.
        """
        steps = (
            ("posts", lambda: self.posts.delete_by_user_id(user_id)),
            ("profile", lambda: self.profiles.delete_by_user_id(user_id)),
            ("user", lambda: self.users.delete(user_id)),
        )
        completed: list[str] = []

        for step, action in steps:
            try:
                result = action()
            except Exception as e:
                if completed:
                    logger.error(
                        "profile_cascade_partial_failure",
                        user_id=user_id,
                        failed_step=step,
                        completed_steps=completed,
                        error=str(e),
                    )
                else:
                    logger.error(
                        "profile_cascade_failed",
                        user_id=user_id,
                        failed_step=step,
                        error=str(e),
                    )
                raise
            logger.debug("profile_cascade_step", user_id=user_id, step=step, result=result)
            completed.append(step)

        self.session.commit()
        logger.info("profile_cascade_deleted", user_id=user_id)

    # -------------------------------------------------------------------------
    # Embedded entries
    # -------------------------------------------------------------------------

    def add_experience(self, user_id: str, payload: ExperienceRequest) -> Profile:
        """Prepend an experience entry with a fresh id."""
        profile = self._require_profile(user_id)
        entry = {"_id": generate_id(), **payload.to_entry()}
        # Reassign so the JSON column is marked dirty
        profile.experience = [entry, *(profile.experience or [])]
        self.profiles.save(profile)
        self.session.commit()
        logger.info("experience_added", user_id=user_id, entry_id=entry["_id"])
        return profile

    def remove_experience(self, user_id: str, entry_id: str) -> Profile:
        """Drop the experience entry with ``entry_id``; unknown ids change nothing."""
        profile = self._require_profile(user_id)
        remaining = _without_entry(profile.experience or [], entry_id)
        if len(remaining) != len(profile.experience or []):
            profile.experience = remaining
            self.profiles.save(profile)
            self.session.commit()
            logger.info("experience_removed", user_id=user_id, entry_id=entry_id)
        return profile

    def add_education(self, user_id: str, payload: EducationRequest) -> Profile:
        """Prepend an education entry with a fresh id."""
        profile = self._require_profile(user_id)
        entry = {"_id": generate_id(), **payload.to_entry()}
        profile.education = [entry, *(profile.education or [])]
        self.profiles.save(profile)
        self.session.commit()
        logger.info("education_added", user_id=user_id, entry_id=entry["_id"])
        return profile

    def remove_education(self, user_id: str, entry_id: str) -> Profile:
        """Drop the education entry with ``entry_id``; unknown ids change nothing."""
        profile = self._require_profile(user_id)
        remaining = _without_entry(profile.education or [], entry_id)
        if len(remaining) != len(profile.education or []):
            profile.education = remaining
            self.profiles.save(profile)
            self.session.commit()
            logger.info("education_removed", user_id=user_id, entry_id=entry_id)
        return profile
