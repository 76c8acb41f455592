"""
Profile endpoints.

Authenticated routes declare the identity dependency first so a missing or
rejected credential is answered before a session is opened.
"""

from fastapi import APIRouter, Depends, Request

from devconnector.api import GitHubRepoLookup
from devconnector.config import Settings
from devconnector.models import Profile

from ..auth.dependencies import Identity, get_current_identity
from ..database import get_profile_service, get_settings_from_app
from ..schemas import (
    EducationRequest,
    EducationResponse,
    ExperienceRequest,
    ExperienceResponse,
    MessageResponse,
    ProfileResponse,
    ProfileUpsertRequest,
    UserSummary,
)
from ..services import ProfileService

router = APIRouter(prefix="/profile", tags=["profile"])


def _profile_to_response(profile: Profile) -> ProfileResponse:
    """Convert a Profile (with its owner loaded) to the wire shape."""
    return ProfileResponse(
        id=profile.id,
        user=UserSummary(id=profile.user.id, name=profile.user.name, avatar=profile.user.avatar),
        company=profile.company,
        website=profile.website,
        location=profile.location,
        status=profile.status,
        skills=profile.skills or [],
        bio=profile.bio,
        githubusername=profile.githubusername,
        social=profile.social or {},
        experience=[ExperienceResponse.model_validate(e) for e in profile.experience or []],
        education=[EducationResponse.model_validate(e) for e in profile.education or []],
        date=profile.date,
    )


def get_repo_lookup(request: Request, settings: Settings = Depends(get_settings_from_app)) -> GitHubRepoLookup:
    """Repository lookup built from app settings; tests swap the transport."""
    transport = getattr(request.app.state, "github_transport", None)
    return GitHubRepoLookup(settings=settings, transport=transport)


@router.get("/me", response_model=ProfileResponse)
def get_my_profile(
    identity: Identity = Depends(get_current_identity),
    service: ProfileService = Depends(get_profile_service),
):
    """Get current user's profile."""
    return _profile_to_response(service.get_own_profile(identity.id))


@router.post("", response_model=ProfileResponse)
def upsert_profile(
    payload: ProfileUpsertRequest,
    identity: Identity = Depends(get_current_identity),
    service: ProfileService = Depends(get_profile_service),
):
    """Create or replace the current user's profile."""
    return _profile_to_response(service.upsert_profile(identity.id, payload))


@router.get("", response_model=list[ProfileResponse])
def list_profiles(service: ProfileService = Depends(get_profile_service)):
    """Get all profiles."""
    return [_profile_to_response(p) for p in service.list_profiles()]


@router.get("/user/{user_id}", response_model=ProfileResponse)
def get_profile_by_user_id(
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
):
    """Get a profile by its owner's user id."""
    return _profile_to_response(service.get_profile_by_user_id(user_id))


@router.delete("", response_model=MessageResponse)
def delete_profile(
    identity: Identity = Depends(get_current_identity),
    service: ProfileService = Depends(get_profile_service),
):
    """Delete the current user's posts, profile and account."""
    service.delete_own_profile_cascade(identity.id)
    return MessageResponse(msg="User deleted")


@router.put("/experience", response_model=ProfileResponse)
def add_experience(
    payload: ExperienceRequest,
    identity: Identity = Depends(get_current_identity),
    service: ProfileService = Depends(get_profile_service),
):
    """Add an experience entry to the current user's profile."""
    return _profile_to_response(service.add_experience(identity.id, payload))


@router.delete("/experience/{exp_id}", response_model=ProfileResponse)
def delete_experience(
    exp_id: str,
    identity: Identity = Depends(get_current_identity),
    service: ProfileService = Depends(get_profile_service),
):
    """Remove an experience entry from the current user's profile."""
    return _profile_to_response(service.remove_experience(identity.id, exp_id))


@router.put("/education", response_model=ProfileResponse)
def add_education(
    payload: EducationRequest,
    identity: Identity = Depends(get_current_identity),
    service: ProfileService = Depends(get_profile_service),
):
    """Add an education entry to the current user's profile."""
    return _profile_to_response(service.add_education(identity.id, payload))


@router.delete("/education/{edu_id}", response_model=ProfileResponse)
def delete_education(
    edu_id: str,
    identity: Identity = Depends(get_current_identity),
    service: ProfileService = Depends(get_profile_service),
):
    """Remove an education entry from the current user's profile."""
    return _profile_to_response(service.remove_education(identity.id, edu_id))


@router.get("/github/{username}")
def get_github_repos(
    username: str,
    lookup: GitHubRepoLookup = Depends(get_repo_lookup),
):
    """Relay a user's most recent public GitHub repositories."""
    return lookup.get_user_repos(username)
