"""Unit tests for ProfileService."""

from datetime import date
from uuid import UUID, uuid4

import pytest

from core.exceptions import ExperienceNotFoundError, ProfileNotFoundError, UserNotFoundError
from domain.entities.profile import Education, Experience, Profile
from domain.entities.user import User
from domain.services.profile_service import ProfileService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> ProfileService:
    return ProfileService(lambda: uow)


@pytest.fixture
def profile(user_id: UUID) -> Profile:
    return Profile(user_id=user_id, status="Developer", skills=["python"])


# --- reads ---


class TestGetForUser:
    @pytest.mark.asyncio
    async def test_bundles_owner(
        self, service: ProfileService, uow: FakeUnitOfWork, profile: Profile, user: User
    ):
        uow.profiles.get_by_user.return_value = profile
        uow.users.get.return_value = user

        view = await service.get_for_user(user.id)

        assert view.profile is profile
        assert view.owner is user

    @pytest.mark.asyncio
    async def test_missing_profile_raises(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get_by_user.return_value = None

        with pytest.raises(ProfileNotFoundError) as exc_info:
            await service.get_for_user(user_id)

        assert exc_info.value.message == "There is no profile for this user"


class TestListAll:
    @pytest.mark.asyncio
    async def test_fetches_owners_in_one_batch(
        self, service: ProfileService, uow: FakeUnitOfWork, user: User, other_user_id: UUID
    ):
        mine = Profile(user_id=user.id, status="Dev")
        orphan = Profile(user_id=other_user_id, status="Dev")
        uow.profiles.list_all.return_value = [mine, orphan]
        uow.users.get_many.return_value = {user.id: user}

        views = await service.list_all()

        uow.users.get_many.assert_called_once_with([user.id, other_user_id])
        assert views[0].owner is user
        assert views[1].owner is None


# --- upsert ---


class TestUpsert:
    @pytest.mark.asyncio
    async def test_creates_when_absent(
        self, service: ProfileService, uow: FakeUnitOfWork, user: User
    ):
        uow.users.get.return_value = user
        uow.profiles.get_by_user.return_value = None
        uow.profiles.create.side_effect = lambda p: p

        view = await service.upsert(
            user.id, {"status": "Developer", "skills": ["python", "sql"], "company": "Acme"}
        )

        created: Profile = uow.profiles.create.call_args.args[0]
        assert created.user_id == user.id
        assert created.skills == ["python", "sql"]
        assert created.company == "Acme"
        assert view.owner is user
        assert uow.committed

    @pytest.mark.asyncio
    async def test_updates_only_sent_fields(
        self, service: ProfileService, uow: FakeUnitOfWork, user: User, profile: Profile
    ):
        profile.bio = "kept"
        uow.users.get.return_value = user
        uow.profiles.get_by_user.return_value = profile
        uow.profiles.update_fields.side_effect = lambda p, fields: p

        view = await service.upsert(user.id, {"status": "Senior", "skills": ["go"]})

        _, fields = uow.profiles.update_fields.call_args.args
        assert fields == {"status": "Senior", "skills": ["go"]}
        assert view.profile.bio == "kept"
        uow.profiles.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_merges_social_links(
        self, service: ProfileService, uow: FakeUnitOfWork, user: User, profile: Profile
    ):
        profile.social = {"youtube": "https://youtube.com/ada"}
        uow.users.get.return_value = user
        uow.profiles.get_by_user.return_value = profile
        uow.profiles.update_fields.side_effect = lambda p, fields: p

        view = await service.upsert(
            user.id,
            {"status": "Dev", "skills": ["go"], "social": {"twitter": "https://twitter.com/ada"}},
        )

        assert view.profile.social == {
            "youtube": "https://youtube.com/ada",
            "twitter": "https://twitter.com/ada",
        }

    @pytest.mark.asyncio
    async def test_unknown_user_raises(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.users.get.return_value = None

        with pytest.raises(UserNotFoundError):
            await service.upsert(user_id, {"status": "Dev", "skills": ["go"]})


# --- experience / education ---


class TestEntries:
    @pytest.mark.asyncio
    async def test_add_experience_prepends(
        self, service: ProfileService, uow: FakeUnitOfWork, user: User, profile: Profile
    ):
        uow.profiles.get_by_user.return_value = profile
        uow.profiles.update.side_effect = lambda p: p
        uow.users.get.return_value = user
        entry = Experience(title="Engineer", company="Acme", from_date=date(2020, 1, 1))

        view = await service.add_experience(user.id, entry)

        assert view.profile.experience[0] is entry
        assert uow.committed

    @pytest.mark.asyncio
    async def test_add_experience_without_profile_raises(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get_by_user.return_value = None
        entry = Experience(title="Engineer", company="Acme", from_date=date(2020, 1, 1))

        with pytest.raises(ProfileNotFoundError):
            await service.add_experience(user_id, entry)

    @pytest.mark.asyncio
    async def test_remove_unknown_experience_raises(
        self, service: ProfileService, uow: FakeUnitOfWork, profile: Profile, user_id: UUID
    ):
        uow.profiles.get_by_user.return_value = profile

        with pytest.raises(ExperienceNotFoundError):
            await service.remove_experience(user_id, uuid4())

        uow.profiles.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_add_then_remove_education(
        self, service: ProfileService, uow: FakeUnitOfWork, user: User, profile: Profile
    ):
        uow.profiles.get_by_user.return_value = profile
        uow.profiles.update.side_effect = lambda p: p
        uow.users.get.return_value = user
        entry = Education(
            school="MIT", degree="BSc", field_of_study="CS", from_date=date(2016, 9, 1)
        )

        await service.add_education(user.id, entry)
        view = await service.remove_education(user.id, entry.id)

        assert view.profile.education == []


# --- delete_account ---


class TestDeleteAccount:
    @pytest.mark.asyncio
    async def test_deletes_posts_profile_and_user_in_one_unit(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        calls: list[str] = []
        uow.posts.delete_for_user.side_effect = lambda uid: calls.append("posts") or 2
        uow.profiles.delete_for_user.side_effect = lambda uid: calls.append("profile") or True
        uow.users.delete.side_effect = lambda uid: calls.append("user") or True

        await service.delete_account(user_id)

        assert calls == ["posts", "profile", "user"]
        uow.posts.delete_for_user.assert_called_once_with(user_id)
        assert uow.committed
