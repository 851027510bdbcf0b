"""SQLAlchemy implementation of Profile repository."""

from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ConcurrentModificationError
from domain.entities.profile import Education, Experience, Profile
from infrastructure.database.models import ProfileModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID."""
        stmt = select(ProfileModel).where(ProfileModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        stmt = select(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_all(self) -> list[Profile]:
        """Get all profiles, oldest first."""
        stmt = select(ProfileModel).order_by(ProfileModel.created_at)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = self._to_model(profile)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            # Another request created this user's profile first
            raise ConcurrentModificationError("profile", str(profile.user_id)) from e
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Write the whole aggregate, conditional on its version."""
        values = {
            "company": profile.company,
            "website": profile.website,
            "location": profile.location,
            "status": profile.status,
            "skills": list(profile.skills),
            "bio": profile.bio,
            "github_username": profile.github_username,
            "social": dict(profile.social),
            "experience": [_experience_to_document(e) for e in profile.experience],
            "education": [_education_to_document(e) for e in profile.education],
        }
        return await self._conditional_write(profile, values)

    async def update_fields(self, profile: Profile, fields: dict[str, Any]) -> Profile:
        """Write only the given columns, conditional on the profile's version."""
        return await self._conditional_write(profile, dict(fields))

    async def delete_for_user(self, user_id: UUID) -> bool:
        """Delete a user's profile."""
        stmt = delete(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    async def _conditional_write(self, profile: Profile, values: dict[str, Any]) -> Profile:
        """UPDATE ... WHERE id = :id AND version = :version, bumping the version."""
        stmt = (
            update(ProfileModel)
            .where(
                ProfileModel.id == profile.id,
                ProfileModel.version == profile.version,
            )
            .values(
                **values,
                updated_at=profile.updated_at,
                version=ProfileModel.version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise ConcurrentModificationError("profile", str(profile.id))

        profile.version += 1
        return profile

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            company=model.company,
            website=model.website,
            location=model.location,
            status=model.status,
            skills=list(model.skills or []),
            bio=model.bio,
            github_username=model.github_username,
            social=dict(model.social or {}),
            experience=[_experience_from_document(d) for d in model.experience or []],
            education=[_education_from_document(d) for d in model.education or []],
            created_at=model.created_at,
            updated_at=model.updated_at,
            version=model.version,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            user_id=entity.user_id,
            company=entity.company,
            website=entity.website,
            location=entity.location,
            status=entity.status,
            skills=list(entity.skills),
            bio=entity.bio,
            github_username=entity.github_username,
            social=dict(entity.social),
            experience=[_experience_to_document(e) for e in entity.experience],
            education=[_education_to_document(e) for e in entity.education],
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            version=entity.version,
        )


def _date_or_none(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


def _experience_to_document(entry: Experience) -> dict[str, Any]:
    return {
        "id": str(entry.id),
        "title": entry.title,
        "company": entry.company,
        "location": entry.location,
        "from_date": entry.from_date.isoformat(),
        "to_date": entry.to_date.isoformat() if entry.to_date else None,
        "current": entry.current,
        "description": entry.description,
    }


def _experience_from_document(doc: dict[str, Any]) -> Experience:
    return Experience(
        id=UUID(doc["id"]),
        title=doc["title"],
        company=doc["company"],
        location=doc.get("location"),
        from_date=date.fromisoformat(doc["from_date"]),
        to_date=_date_or_none(doc.get("to_date")),
        current=bool(doc.get("current", False)),
        description=doc.get("description"),
    )


def _education_to_document(entry: Education) -> dict[str, Any]:
    return {
        "id": str(entry.id),
        "school": entry.school,
        "degree": entry.degree,
        "field_of_study": entry.field_of_study,
        "from_date": entry.from_date.isoformat(),
        "to_date": entry.to_date.isoformat() if entry.to_date else None,
        "current": entry.current,
        "description": entry.description,
    }


def _education_from_document(doc: dict[str, Any]) -> Education:
    return Education(
        id=UUID(doc["id"]),
        school=doc["school"],
        degree=doc["degree"],
        field_of_study=doc["field_of_study"],
        from_date=date.fromisoformat(doc["from_date"]),
        to_date=_date_or_none(doc.get("to_date")),
        current=bool(doc.get("current", False)),
        description=doc.get("description"),
    )
