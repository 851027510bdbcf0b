"""Unit tests for PostService."""

from uuid import UUID, uuid4

import pytest

from core.exceptions import (
    AlreadyLikedError,
    CommentNotFoundError,
    ConcurrentModificationError,
    NotAuthorizedError,
    NotLikedError,
    PostNotFoundError,
)
from domain.entities.post import Comment, Like, Post
from domain.entities.user import User
from domain.services.post_service import PostService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> PostService:
    return PostService(lambda: uow)


@pytest.fixture
def post(other_user_id: UUID) -> Post:
    return Post(user_id=other_user_id, text="hello", name="Grace Hopper")


def _echo_update(uow: FakeUnitOfWork) -> None:
    uow.posts.update.side_effect = lambda post: post


# --- create ---


class TestCreate:
    @pytest.mark.asyncio
    async def test_snapshots_author_name_and_avatar(
        self, service: PostService, uow: FakeUnitOfWork, user: User
    ):
        uow.users.get.return_value = user
        uow.posts.create.side_effect = lambda post: post

        result = await service.create(user.id, "hello")

        assert result.name == user.name
        assert result.avatar == user.avatar
        assert result.user_id == user.id
        assert result.likes == []
        assert result.comments == []
        assert uow.committed


# --- get / delete ---


class TestGetAndDelete:
    @pytest.mark.asyncio
    async def test_get_missing_raises(self, service: PostService, uow: FakeUnitOfWork):
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.get(uuid4())

    @pytest.mark.asyncio
    async def test_author_can_delete(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, other_user_id: UUID
    ):
        uow.posts.get.return_value = post

        await service.delete(post.id, other_user_id)

        uow.posts.delete.assert_called_once_with(post.id)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_non_author_cannot_delete(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user_id: UUID
    ):
        uow.posts.get.return_value = post

        with pytest.raises(NotAuthorizedError):
            await service.delete(post.id, user_id)

        uow.posts.delete.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_delete_missing_is_not_found_before_ownership(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.delete(uuid4(), user_id)


# --- likes ---


class TestLikes:
    @pytest.mark.asyncio
    async def test_like_returns_likes(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user_id: UUID
    ):
        uow.posts.get.return_value = post
        _echo_update(uow)

        likes = await service.like(post.id, user_id)

        assert likes == [Like(user_id=user_id)]
        assert uow.committed

    @pytest.mark.asyncio
    async def test_like_twice_raises(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user_id: UUID
    ):
        post.likes = [Like(user_id=user_id)]
        uow.posts.get.return_value = post

        with pytest.raises(AlreadyLikedError):
            await service.like(post.id, user_id)

        uow.posts.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_unlike_not_liked_raises(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user_id: UUID
    ):
        uow.posts.get.return_value = post

        with pytest.raises(NotLikedError):
            await service.unlike(post.id, user_id)

    @pytest.mark.asyncio
    async def test_unlike_removes_like(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user_id: UUID
    ):
        post.likes = [Like(user_id=user_id)]
        uow.posts.get.return_value = post
        _echo_update(uow)

        likes = await service.unlike(post.id, user_id)

        assert likes == []

    @pytest.mark.asyncio
    async def test_concurrent_write_is_surfaced(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user_id: UUID
    ):
        uow.posts.get.return_value = post
        uow.posts.update.side_effect = ConcurrentModificationError("post", str(post.id))

        with pytest.raises(ConcurrentModificationError):
            await service.like(post.id, user_id)

        assert not uow.committed


# --- comments ---


class TestComments:
    @pytest.mark.asyncio
    async def test_add_comment_snapshots_commenter(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user: User
    ):
        uow.posts.get.return_value = post
        uow.users.get.return_value = user
        _echo_update(uow)

        comments = await service.add_comment(post.id, user.id, "nice post")

        assert len(comments) == 1
        assert comments[0].text == "nice post"
        assert comments[0].name == user.name
        assert comments[0].avatar == user.avatar

    @pytest.mark.asyncio
    async def test_remove_own_comment(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user_id: UUID
    ):
        mine = Comment(user_id=user_id, text="mine", name="Ada")
        post.comments = [mine]
        uow.posts.get.return_value = post
        _echo_update(uow)

        comments = await service.remove_comment(post.id, mine.id, user_id)

        assert comments == []

    @pytest.mark.asyncio
    async def test_remove_removes_the_located_comment(
        self,
        service: PostService,
        uow: FakeUnitOfWork,
        post: Post,
        user_id: UUID,
        other_user_id: UUID,
    ):
        theirs = Comment(user_id=other_user_id, text="theirs", name="Grace")
        mine = Comment(user_id=user_id, text="mine", name="Ada")
        post.comments = [theirs, mine]
        uow.posts.get.return_value = post
        _echo_update(uow)

        comments = await service.remove_comment(post.id, mine.id, user_id)

        assert comments == [theirs]

    @pytest.mark.asyncio
    async def test_remove_others_comment_is_rejected(
        self,
        service: PostService,
        uow: FakeUnitOfWork,
        post: Post,
        user_id: UUID,
        other_user_id: UUID,
    ):
        theirs = Comment(user_id=other_user_id, text="theirs", name="Grace")
        post.comments = [theirs]
        uow.posts.get.return_value = post

        with pytest.raises(NotAuthorizedError):
            await service.remove_comment(post.id, theirs.id, user_id)

        assert post.comments == [theirs]

    @pytest.mark.asyncio
    async def test_remove_unknown_comment_raises(
        self, service: PostService, uow: FakeUnitOfWork, post: Post, user_id: UUID
    ):
        uow.posts.get.return_value = post

        with pytest.raises(CommentNotFoundError):
            await service.remove_comment(post.id, uuid4(), user_id)
