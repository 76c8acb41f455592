"""
Pydantic schemas for request and response validation.

Request models carry the messages reported in the ``errors`` array, so a
missing field reads the same whether it was absent, null or blank.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError


FROM_DATE_MESSAGE = "From date is required and must be valid"


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _required(value: Any, message: str) -> Any:
    if _blank(value):
        raise PydanticCustomError("required", message)
    return value


def _blank_to_none(value: Any) -> Any:
    """Forms post empty strings for untouched inputs."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


# =============================================================================
# Requests
# =============================================================================


class ProfileUpsertRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: str | None = Field(default=None, validate_default=True)
    skills: str | list[str] | None = Field(default=None, validate_default=True)
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    # Social links arrive flat and are nested by the service
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None

    @field_validator("status")
    @classmethod
    def status_required(cls, v: str | None) -> str | None:
        return _required(v, "Status is required")

    @field_validator("skills")
    @classmethod
    def skills_required(cls, v: str | list[str] | None) -> str | list[str] | None:
        if isinstance(v, list) and all(_blank(skill) for skill in v):
            v = None
        return _required(v, "Skills is required")


class _DatedEntryRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    # "to" is declared first so the "from" check can compare against it
    to_date: date | None = Field(default=None, alias="to")
    from_date: date | None = Field(default=None, alias="from", validate_default=True)
    current: bool = False
    description: str | None = None

    @field_validator("from_date", "to_date", mode="before")
    @classmethod
    def empty_date_is_missing(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("from_date")
    @classmethod
    def from_valid(cls, v: date | None, info: ValidationInfo) -> date | None:
        """Required, and earlier than ``to`` when an end date is given."""
        _required(v, FROM_DATE_MESSAGE)
        end = info.data.get("to_date")
        if end is not None and not v < end:
            raise PydanticCustomError("date_order", FROM_DATE_MESSAGE)
        return v

    def to_entry(self) -> dict[str, Any]:
        """Serialize to the stored (wire-named) entry shape."""
        return self.model_dump(by_alias=True, mode="json")


class ExperienceRequest(_DatedEntryRequest):
    title: str | None = Field(default=None, validate_default=True)
    company: str | None = Field(default=None, validate_default=True)
    location: str | None = None

    @field_validator("title")
    @classmethod
    def title_required(cls, v: str | None) -> str | None:
        return _required(v, "Title is required")

    @field_validator("company")
    @classmethod
    def company_required(cls, v: str | None) -> str | None:
        return _required(v, "Company is required")


class EducationRequest(_DatedEntryRequest):
    school: str | None = Field(default=None, validate_default=True)
    degree: str | None = Field(default=None, validate_default=True)
    fieldofstudy: str | None = Field(default=None, validate_default=True)

    @field_validator("school")
    @classmethod
    def school_required(cls, v: str | None) -> str | None:
        return _required(v, "School is required")

    @field_validator("degree")
    @classmethod
    def degree_required(cls, v: str | None) -> str | None:
        return _required(v, "Degree is required")

    @field_validator("fieldofstudy")
    @classmethod
    def fieldofstudy_required(cls, v: str | None) -> str | None:
        return _required(v, "Field of study is required")


# =============================================================================
# Responses
# =============================================================================


class MessageResponse(BaseModel):
    msg: str


class UserSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    name: str
    avatar: str | None = None


class ExperienceResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    title: str
    company: str
    location: str | None = None
    from_date: date = Field(alias="from")
    to_date: date | None = Field(default=None, alias="to")
    current: bool = False
    description: str | None = None


class EducationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    school: str
    degree: str
    fieldofstudy: str
    from_date: date = Field(alias="from")
    to_date: date | None = Field(default=None, alias="to")
    current: bool = False
    description: str | None = None


class ProfileResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    user: UserSummary
    company: str | None = None
    website: str | None = None
    location: str | None = None
    status: str
    skills: list[str] = Field(default_factory=list)
    bio: str | None = None
    githubusername: str | None = None
    social: dict[str, str] = Field(default_factory=dict)
    experience: list[ExperienceResponse] = Field(default_factory=list)
    education: list[EducationResponse] = Field(default_factory=list)
    date: datetime | None = None
