"""Pydantic schemas for Profile API."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from domain.entities.profile import SOCIAL_NETWORKS, ProfileWithOwner


class SocialLinks(BaseModel):
    """Links to the owner's accounts on other networks."""

    model_config = ConfigDict(str_strip_whitespace=True)

    youtube: str | None = Field(None, max_length=500)
    twitter: str | None = Field(None, max_length=500)
    facebook: str | None = Field(None, max_length=500)
    linkedin: str | None = Field(None, max_length=500)
    instagram: str | None = Field(None, max_length=500)


class ProfileUpsert(BaseModel):
    """Schema for creating or updating the caller's profile.

    ``skills`` may be sent as a list or as a comma-separated string.
    Social links may be nested under ``social`` or sent as top-level keys.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    status: str = Field(..., min_length=1, max_length=255)
    skills: list[str] = Field(..., min_length=1)
    company: str | None = Field(None, max_length=255)
    website: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=255)
    bio: str | None = Field(None, max_length=2000)
    github_username: str | None = Field(
        None,
        max_length=100,
        validation_alias=AliasChoices("githubusername", "github_username"),
    )
    social: SocialLinks | None = None

    @model_validator(mode="before")
    @classmethod
    def collect_social_links(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        flat = {k: data[k] for k in SOCIAL_NETWORKS if k in data}
        if not flat:
            return data
        nested = data.get("social")
        data = {k: v for k, v in data.items() if k not in SOCIAL_NETWORKS}
        data["social"] = {**(nested if isinstance(nested, dict) else {}), **flat}
        return data

    @field_validator("skills", mode="before")
    @classmethod
    def split_skills(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, list):
            v = [s.strip() if isinstance(s, str) else s for s in v]
            return [s for s in v if s != ""]
        return v

    def to_changes(self) -> dict[str, Any]:
        """Fields the client actually sent with a value."""
        changes = self.model_dump(
            exclude_unset=True, exclude_none=True, exclude={"social"}
        )
        changes = {k: v for k, v in changes.items() if v != ""}
        if self.social is not None:
            links = {
                k: v for k, v in self.social.model_dump(exclude_none=True).items() if v
            }
            if links:
                changes["social"] = links
        return changes


def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str) and not v.strip():
        return None
    return v


class _DatedEntry(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    from_date: date = Field(..., validation_alias=AliasChoices("from", "from_date"))
    to_date: date | None = Field(None, validation_alias=AliasChoices("to", "to_date"))
    current: bool = False
    description: str | None = Field(None, max_length=2000)

    @field_validator("to_date", mode="before")
    @classmethod
    def empty_to_date(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @model_validator(mode="after")
    def check_date_range(self) -> "_DatedEntry":
        if self.current:
            self.to_date = None
        elif self.to_date is not None and self.to_date < self.from_date:
            raise ValueError("'to' date must not be before 'from' date")
        return self


class ExperienceCreate(_DatedEntry):
    """Schema for adding a work history entry."""

    title: str = Field(..., min_length=1, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    location: str | None = Field(None, max_length=255)


class EducationCreate(_DatedEntry):
    """Schema for adding an education entry."""

    school: str = Field(..., min_length=1, max_length=255)
    degree: str = Field(..., min_length=1, max_length=255)
    field_of_study: str = Field(
        ...,
        min_length=1,
        max_length=255,
        validation_alias=AliasChoices("fieldofstudy", "field_of_study"),
    )


class ExperienceResponse(BaseModel):
    """Work history entry, serialized under the client's field names."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    company: str
    location: str | None
    from_date: date = Field(serialization_alias="from")
    to_date: date | None = Field(serialization_alias="to")
    current: bool
    description: str | None


class EducationResponse(BaseModel):
    """Education entry, serialized under the client's field names."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    school: str
    degree: str
    field_of_study: str = Field(serialization_alias="fieldofstudy")
    from_date: date = Field(serialization_alias="from")
    to_date: date | None = Field(serialization_alias="to")
    current: bool
    description: str | None


class ProfileOwner(BaseModel):
    """Public fields of the profile's owner."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    avatar: str | None = None


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "user": {
                    "id": "456e4567-e89b-12d3-a456-426614174000",
                    "name": "Ada Lovelace",
                    "avatar": "https://www.gravatar.com/avatar/0bc83cb571cd1c50ba6f3e8a78ef1346?s=200&r=pg&d=mm",
                },
                "status": "Developer",
                "skills": ["python", "sql"],
                "company": None,
                "website": None,
                "location": "London",
                "bio": None,
                "githubusername": "ada",
                "social": {"twitter": "https://twitter.com/ada"},
                "experience": [],
                "education": [],
                "created_at": "2026-01-28T10:00:00",
                "updated_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    user: ProfileOwner | None
    status: str
    skills: list[str]
    company: str | None
    website: str | None
    location: str | None
    bio: str | None
    github_username: str | None = Field(serialization_alias="githubusername")
    social: dict[str, str]
    experience: list[ExperienceResponse]
    education: list[EducationResponse]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_view(cls, view: ProfileWithOwner) -> "ProfileResponse":
        profile = view.profile
        owner = view.owner
        return cls(
            id=profile.id,
            user=ProfileOwner.model_validate(owner) if owner else None,
            status=profile.status,
            skills=profile.skills,
            company=profile.company,
            website=profile.website,
            location=profile.location,
            bio=profile.bio,
            github_username=profile.github_username,
            social=profile.social,
            experience=[ExperienceResponse.model_validate(e) for e in profile.experience],
            education=[EducationResponse.model_validate(e) for e in profile.education],
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )
