"""Post API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.rest.dependencies import get_post_service
from api.rest.schemas.common import ErrorResponse, MessageResponse
from api.rest.schemas.post import (
    CommentCreate,
    CommentResponse,
    LikeResponse,
    PostCreate,
    PostResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post(
    "",
    response_model=PostResponse,
    summary="Create a post",
    responses={
        200: {"description": "Post created"},
        400: {"model": ErrorResponse, "description": "Validation error"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_post(
    request: Request,
    body: PostCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Create a post. The author's current name and avatar are copied onto it."""
    post = await service.create(user.id, body.text)
    return PostResponse.model_validate(post)


@router.get(
    "",
    response_model=list[PostResponse],
    summary="List all posts",
    responses={
        200: {"description": "Posts, newest first"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_posts(
    request: Request,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[PostResponse]:
    posts = await service.list_recent()
    return [PostResponse.model_validate(p) for p in posts]


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    summary="Get a post",
    responses={
        200: {"description": "Post with likes and comments"},
        404: {"model": ErrorResponse, "description": "Post not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    post = await service.get(post_id)
    return PostResponse.model_validate(post)


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    summary="Delete a post",
    responses={
        200: {"description": "Post removed"},
        401: {"model": ErrorResponse, "description": "Caller is not the author"},
        404: {"model": ErrorResponse, "description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> MessageResponse:
    await service.delete(post_id, user.id)
    return MessageResponse(message="Post removed")


@router.put(
    "/like/{post_id}",
    response_model=list[LikeResponse],
    summary="Like a post",
    responses={
        200: {"description": "Likes after the change"},
        400: {"model": ErrorResponse, "description": "Post already liked"},
        404: {"model": ErrorResponse, "description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def like_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[LikeResponse]:
    likes = await service.like(post_id, user.id)
    return [LikeResponse.model_validate(like) for like in likes]


@router.put(
    "/unlike/{post_id}",
    response_model=list[LikeResponse],
    summary="Unlike a post",
    responses={
        200: {"description": "Likes after the change"},
        400: {"model": ErrorResponse, "description": "Post has not yet been liked"},
        404: {"model": ErrorResponse, "description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def unlike_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[LikeResponse]:
    likes = await service.unlike(post_id, user.id)
    return [LikeResponse.model_validate(like) for like in likes]


@router.post(
    "/comment/{post_id}",
    response_model=list[CommentResponse],
    summary="Comment on a post",
    responses={
        200: {"description": "Comments after the change, newest first"},
        400: {"model": ErrorResponse, "description": "Validation error"},
        404: {"model": ErrorResponse, "description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_comment(
    request: Request,
    post_id: UUID,
    body: CommentCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[CommentResponse]:
    comments = await service.add_comment(post_id, user.id, body.text)
    return [CommentResponse.model_validate(c) for c in comments]


@router.delete(
    "/comment/{post_id}/{comment_id}",
    response_model=list[CommentResponse],
    summary="Delete a comment",
    responses={
        200: {"description": "Comments after the change"},
        401: {"model": ErrorResponse, "description": "Caller is not the comment's author"},
        404: {"model": ErrorResponse, "description": "Post or comment not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_comment(
    request: Request,
    post_id: UUID,
    comment_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[CommentResponse]:
    """Delete one of the caller's own comments."""
    comments = await service.remove_comment(post_id, comment_id, user.id)
    return [CommentResponse.model_validate(c) for c in comments]
