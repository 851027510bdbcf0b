"""Post domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from core.exceptions import AlreadyLikedError, CommentNotFoundError, NotLikedError
from domain.entities.subdocuments import index_of, prepend, remove_at


@dataclass(frozen=True, slots=True)
class Like:
    """A user's like on a post."""

    user_id: UUID


@dataclass
class Comment:
    """Embedded comment with a snapshot of the author's name and avatar."""

    user_id: UUID
    text: str
    name: str
    id: UUID = field(default_factory=uuid4)
    avatar: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Post:
    """Domain entity for a feed post.

    ``name`` and ``avatar`` are copied from the author when the post is
    created and are not refreshed afterwards.
    """

    user_id: UUID
    text: str
    name: str
    id: UUID = field(default_factory=uuid4)
    avatar: str | None = None
    likes: list[Like] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    version: int = 1

    def is_liked_by(self, user_id: UUID) -> bool:
        return index_of(self.likes, lambda like: like.user_id == user_id) >= 0

    def add_like(self, user_id: UUID) -> list[Like]:
        """Prepend a like; a user may like a post once."""
        if self.is_liked_by(user_id):
            raise AlreadyLikedError(str(self.id))
        self.likes = prepend(self.likes, Like(user_id=user_id))
        return self.likes

    def remove_like(self, user_id: UUID) -> list[Like]:
        index = index_of(self.likes, lambda like: like.user_id == user_id)
        if index < 0:
            raise NotLikedError(str(self.id))
        self.likes = remove_at(self.likes, index)
        return self.likes

    def add_comment(self, comment: Comment) -> list[Comment]:
        self.comments = prepend(self.comments, comment)
        return self.comments

    def comment_index(self, comment_id: UUID) -> int:
        """Position of a comment, raising if it is not on this post."""
        index = index_of(self.comments, lambda c: c.id == comment_id)
        if index < 0:
            raise CommentNotFoundError(str(comment_id))
        return index

    def remove_comment_at(self, index: int) -> list[Comment]:
        self.comments = remove_at(self.comments, index)
        return self.comments
