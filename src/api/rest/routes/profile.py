"""Profile API routes."""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Request

from api.dependencies.auth import CurrentUser
from api.rest.dependencies import get_github_client, get_profile_service
from api.rest.schemas.common import ErrorResponse, MessageResponse
from api.rest.schemas.profile import EducationCreate, ExperienceCreate, ProfileResponse, ProfileUpsert
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.profile import Education, Experience
from domain.services.profile_service import ProfileService
from infrastructure.github.client import GitHubClient

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get the caller's profile",
    responses={
        200: {"description": "Profile with owner name and avatar"},
        404: {"model": ErrorResponse, "description": "The caller has no profile"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    view = await service.get_for_user(user.id)
    return ProfileResponse.from_view(view)


@router.post(
    "",
    response_model=ProfileResponse,
    summary="Create or update the caller's profile",
    responses={
        200: {"description": "Profile created or updated"},
        400: {"model": ErrorResponse, "description": "Validation error"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def upsert_profile(
    request: Request,
    body: ProfileUpsert,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """
    Create the caller's profile, or update it in place.

    Only fields present in the body are written. Social links are merged
    per network, so sending `twitter` alone keeps a stored `youtube` link.
    """
    view = await service.upsert(user.id, body.to_changes())
    return ProfileResponse.from_view(view)


@router.get(
    "",
    response_model=list[ProfileResponse],
    summary="List all profiles",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> list[ProfileResponse]:
    views = await service.list_all()
    return [ProfileResponse.from_view(v) for v in views]


@router.get(
    "/user/{user_id}",
    response_model=ProfileResponse,
    summary="Get a user's profile",
    responses={
        200: {"description": "Profile with owner name and avatar"},
        404: {"model": ErrorResponse, "description": "Profile not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile_by_user(
    request: Request,
    user_id: UUID,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    view = await service.get_for_user(user_id)
    return ProfileResponse.from_view(view)


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete the caller's account",
    responses={
        200: {"description": "Posts, profile and user removed"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_account(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> MessageResponse:
    """Delete the caller's posts, then their profile, then the user itself."""
    await service.delete_account(user.id)
    return MessageResponse(message="User deleted")


@router.put(
    "/experience",
    response_model=ProfileResponse,
    summary="Add an experience entry",
    responses={
        200: {"description": "Entry added at the front of the list"},
        400: {"model": ErrorResponse, "description": "Validation error"},
        404: {"model": ErrorResponse, "description": "The caller has no profile"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_experience(
    request: Request,
    body: ExperienceCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    entry = Experience(
        title=body.title,
        company=body.company,
        location=body.location,
        from_date=body.from_date,
        to_date=body.to_date,
        current=body.current,
        description=body.description,
    )
    view = await service.add_experience(user.id, entry)
    return ProfileResponse.from_view(view)


@router.delete(
    "/experience/{exp_id}",
    response_model=ProfileResponse,
    summary="Remove an experience entry",
    responses={
        200: {"description": "Entry removed"},
        404: {"model": ErrorResponse, "description": "Profile or entry not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_experience(
    request: Request,
    user: CurrentUser,
    exp_id: UUID = Path(..., description="Experience entry ID"),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    view = await service.remove_experience(user.id, exp_id)
    return ProfileResponse.from_view(view)


@router.put(
    "/education",
    response_model=ProfileResponse,
    summary="Add an education entry",
    responses={
        200: {"description": "Entry added at the front of the list"},
        400: {"model": ErrorResponse, "description": "Validation error"},
        404: {"model": ErrorResponse, "description": "The caller has no profile"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_education(
    request: Request,
    body: EducationCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    entry = Education(
        school=body.school,
        degree=body.degree,
        field_of_study=body.field_of_study,
        from_date=body.from_date,
        to_date=body.to_date,
        current=body.current,
        description=body.description,
    )
    view = await service.add_education(user.id, entry)
    return ProfileResponse.from_view(view)


@router.delete(
    "/education/{edu_id}",
    response_model=ProfileResponse,
    summary="Remove an education entry",
    responses={
        200: {"description": "Entry removed"},
        404: {"model": ErrorResponse, "description": "Profile or entry not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_education(
    request: Request,
    user: CurrentUser,
    edu_id: UUID = Path(..., description="Education entry ID"),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    view = await service.remove_education(user.id, edu_id)
    return ProfileResponse.from_view(view)


@router.get(
    "/github/{username}",
    response_model=list[dict[str, Any]],
    summary="List a GitHub user's repositories",
    responses={
        200: {"description": "Up to five repositories, oldest first"},
        400: {"model": ErrorResponse, "description": "Malformed GitHub username"},
        404: {"model": ErrorResponse, "description": "No GitHub profile found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_github_repositories(
    request: Request,
    username: str = Path(..., min_length=1, max_length=39, pattern=r"^[A-Za-z0-9-]+$"),
    client: GitHubClient = Depends(get_github_client),
) -> list[dict[str, Any]]:
    """Proxy to the GitHub API using the server's client credentials."""
    return await client.list_repositories(username)
