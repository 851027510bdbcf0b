"""Profile domain entities."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any
from uuid import UUID, uuid4

from core.exceptions import EducationNotFoundError, ExperienceNotFoundError
from domain.entities.subdocuments import index_of, prepend, remove_at
from domain.entities.user import User

# Columns a create-or-update request may touch
PROFILE_FIELDS = (
    "company",
    "website",
    "location",
    "status",
    "skills",
    "bio",
    "github_username",
    "social",
)

SOCIAL_NETWORKS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


@dataclass
class Experience:
    """Embedded work history entry."""

    title: str
    company: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    location: str | None = None
    to_date: date | None = None
    current: bool = False
    description: str | None = None

    def __post_init__(self) -> None:
        """A current position has no end date."""
        if self.current:
            self.to_date = None


@dataclass
class Education:
    """Embedded education entry."""

    school: str
    degree: str
    field_of_study: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    to_date: date | None = None
    current: bool = False
    description: str | None = None

    def __post_init__(self) -> None:
        """Ongoing studies have no end date."""
        if self.current:
            self.to_date = None


@dataclass
class Profile:
    """Domain entity for a developer profile (one per user)."""

    user_id: UUID
    status: str
    skills: list[str] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    github_username: str | None = None
    social: dict[str, str] = field(default_factory=dict)
    experience: list[Experience] = field(default_factory=list)
    education: list[Education] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
    version: int = 1

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    def apply_changes(self, changes: dict[str, Any]) -> dict[str, Any]:
        """Merge a sparse update into the profile.

        Only keys present in ``changes`` are touched. Social links are merged
        per network rather than replaced wholesale. Returns the column values
        that were written so the repository can persist exactly those.
        """
        written: dict[str, Any] = {}
        for name, value in changes.items():
            if name not in PROFILE_FIELDS:
                continue
            if name == "social":
                value = {**self.social, **value}
            setattr(self, name, value)
            written[name] = value
        if written:
            self.updated_at = datetime.utcnow()
        return written

    def add_experience(self, entry: Experience) -> Experience:
        self.experience = prepend(self.experience, entry)
        self.updated_at = datetime.utcnow()
        return entry

    def remove_experience(self, experience_id: UUID) -> Experience:
        index = index_of(self.experience, lambda e: e.id == experience_id)
        if index < 0:
            raise ExperienceNotFoundError(str(experience_id))
        removed = self.experience[index]
        self.experience = remove_at(self.experience, index)
        self.updated_at = datetime.utcnow()
        return removed

    def add_education(self, entry: Education) -> Education:
        self.education = prepend(self.education, entry)
        self.updated_at = datetime.utcnow()
        return entry

    def remove_education(self, education_id: UUID) -> Education:
        index = index_of(self.education, lambda e: e.id == education_id)
        if index < 0:
            raise EducationNotFoundError(str(education_id))
        removed = self.education[index]
        self.education = remove_at(self.education, index)
        self.updated_at = datetime.utcnow()
        return removed


@dataclass(frozen=True, slots=True)
class ProfileWithOwner:
    """Read-only value object: a Profile bundled with its owner's public fields."""

    profile: Profile
    owner: User | None
