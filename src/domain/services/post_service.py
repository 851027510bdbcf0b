"""Post service layer with business logic."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import PostNotFoundError, UserNotFoundError
from domain.entities.post import Comment, Like, Post
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.ownership import ensure_owner

logger = structlog.get_logger()


class PostService:
    """Service layer for Post business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(self, user_id: UUID, text: str) -> Post:
        """Create a post, snapshotting the author's name and avatar."""
        async with self._uow_factory() as uow:
            author = await self._require_user(uow, user_id)
            post = Post(
                user_id=user_id,
                text=text,
                name=author.name,
                avatar=author.avatar,
            )
            created = await uow.posts.create(post)
            await uow.commit()

        logger.info("post_created", post_id=str(created.id), user_id=str(user_id))
        return created

    async def list_recent(self) -> list[Post]:
        """Get all posts, newest first."""
        async with self._uow_factory() as uow:
            return await uow.posts.list_recent()

    async def get(self, post_id: UUID) -> Post:
        """Get a single post."""
        async with self._uow_factory() as uow:
            return await self._require_post(uow, post_id)

    async def delete(self, post_id: UUID, user_id: UUID) -> None:
        """Delete a post. Only its author may do so."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            ensure_owner(post, user_id, "post")
            await uow.posts.delete(post_id)
            await uow.commit()

        logger.info("post_deleted", post_id=str(post_id), user_id=str(user_id))

    async def like(self, post_id: UUID, user_id: UUID) -> list[Like]:
        """Add the caller's like; returns the resulting likes."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            post.add_like(user_id)
            post = await uow.posts.update(post)
            await uow.commit()
            return post.likes

    async def unlike(self, post_id: UUID, user_id: UUID) -> list[Like]:
        """Remove the caller's like; returns the resulting likes."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            post.remove_like(user_id)
            post = await uow.posts.update(post)
            await uow.commit()
            return post.likes

    async def add_comment(self, post_id: UUID, user_id: UUID, text: str) -> list[Comment]:
        """Prepend a comment by the caller; returns the resulting comments."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            author = await self._require_user(uow, user_id)
            post.add_comment(
                Comment(
                    user_id=user_id,
                    text=text,
                    name=author.name,
                    avatar=author.avatar,
                )
            )
            post = await uow.posts.update(post)
            await uow.commit()
            return post.comments

    async def remove_comment(
        self, post_id: UUID, comment_id: UUID, user_id: UUID
    ) -> list[Comment]:
        """Remove one of the caller's comments; returns the resulting comments."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            index = post.comment_index(comment_id)
            ensure_owner(post.comments[index], user_id, "comment")
            post.remove_comment_at(index)
            post = await uow.posts.update(post)
            await uow.commit()
            return post.comments

    async def _require_post(self, uow: IUnitOfWork, post_id: UUID) -> Post:
        post = await uow.posts.get(post_id)
        if not post:
            raise PostNotFoundError(str(post_id))
        return post

    async def _require_user(self, uow: IUnitOfWork, user_id: UUID) -> User:
        user = await uow.users.get(user_id)
        if not user:
            raise UserNotFoundError(str(user_id))
        return user
