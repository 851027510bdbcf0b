"""Profile service layer with business logic."""

from collections.abc import Callable
from typing import Any
from uuid import UUID

import structlog

from core.exceptions import ProfileNotFoundError, UserNotFoundError
from domain.entities.profile import Education, Experience, Profile, ProfileWithOwner
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class ProfileService:
    """Service layer for Profile business logic.

    Every mutation looks the profile up by the caller's own user id, so a
    user can only ever change their own profile.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_for_user(self, user_id: UUID) -> ProfileWithOwner:
        """Get a user's profile with the owner's name and avatar."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))
            owner = await uow.users.get(user_id)
            return ProfileWithOwner(profile=profile, owner=owner)

    async def list_all(self) -> list[ProfileWithOwner]:
        """Get every profile with its owner (batch fetch)."""
        async with self._uow_factory() as uow:
            profiles = await uow.profiles.list_all()
            owners = await uow.users.get_many([p.user_id for p in profiles])
            return [
                ProfileWithOwner(profile=p, owner=owners.get(p.user_id))
                for p in profiles
            ]

    async def upsert(self, user_id: UUID, changes: dict[str, Any]) -> ProfileWithOwner:
        """Create the caller's profile, or sparse-merge ``changes`` into it."""
        async with self._uow_factory() as uow:
            owner = await uow.users.get(user_id)
            if not owner:
                raise UserNotFoundError(str(user_id))

            profile = await uow.profiles.get_by_user(user_id)
            if profile:
                written = profile.apply_changes(changes)
                if written:
                    profile = await uow.profiles.update_fields(profile, written)
                logger.info("profile_updated", user_id=str(user_id), fields=sorted(written))
            else:
                profile = Profile(user_id=user_id, status=changes.get("status", ""))
                profile.apply_changes(changes)
                profile = await uow.profiles.create(profile)
                logger.info("profile_created", user_id=str(user_id))

            await uow.commit()
            return ProfileWithOwner(profile=profile, owner=owner)

    async def add_experience(self, user_id: UUID, entry: Experience) -> ProfileWithOwner:
        """Prepend an experience entry to the caller's profile."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            profile.add_experience(entry)
            profile = await uow.profiles.update(profile)
            owner = await uow.users.get(user_id)
            await uow.commit()
            return ProfileWithOwner(profile=profile, owner=owner)

    async def remove_experience(self, user_id: UUID, experience_id: UUID) -> ProfileWithOwner:
        """Remove one experience entry from the caller's profile."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            profile.remove_experience(experience_id)
            profile = await uow.profiles.update(profile)
            owner = await uow.users.get(user_id)
            await uow.commit()
            return ProfileWithOwner(profile=profile, owner=owner)

    async def add_education(self, user_id: UUID, entry: Education) -> ProfileWithOwner:
        """Prepend an education entry to the caller's profile."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            profile.add_education(entry)
            profile = await uow.profiles.update(profile)
            owner = await uow.users.get(user_id)
            await uow.commit()
            return ProfileWithOwner(profile=profile, owner=owner)

    async def remove_education(self, user_id: UUID, education_id: UUID) -> ProfileWithOwner:
        """Remove one education entry from the caller's profile."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            profile.remove_education(education_id)
            profile = await uow.profiles.update(profile)
            owner = await uow.users.get(user_id)
            await uow.commit()
            return ProfileWithOwner(profile=profile, owner=owner)

    async def delete_account(self, user_id: UUID) -> None:
        """Delete the caller's posts, then profile, then user."""
        async with self._uow_factory() as uow:
            posts_deleted = await uow.posts.delete_for_user(user_id)
            profile_deleted = await uow.profiles.delete_for_user(user_id)
            user_deleted = await uow.users.delete(user_id)
            await uow.commit()

        logger.info(
            "account_deleted",
            user_id=str(user_id),
            posts_deleted=posts_deleted,
            profile_deleted=profile_deleted,
            user_deleted=user_deleted,
        )

    async def _require_profile(self, uow: IUnitOfWork, user_id: UUID) -> Profile:
        profile = await uow.profiles.get_by_user(user_id)
        if not profile:
            raise ProfileNotFoundError(str(user_id))
        return profile
