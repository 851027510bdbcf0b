"""Auth API routes: identity lookup and login."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.rest.dependencies import get_auth_service
from api.rest.schemas.auth import LoginRequest, TokenResponse, UserResponse
from api.rest.schemas.common import ErrorResponse
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get(
    "",
    response_model=UserResponse,
    summary="Get the authenticated user",
    responses={
        200: {"description": "The caller's account, without the password"},
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
        404: {"model": ErrorResponse, "description": "Account no longer exists"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_me(
    request: Request,
    user: CurrentUser,
    service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    """Get the account behind the presented token."""
    account = await service.get_user(user.id)
    return UserResponse.model_validate(account)


@router.post(
    "",
    response_model=TokenResponse,
    summary="Log in",
    responses={
        200: {"description": "Credentials accepted"},
        400: {"model": ErrorResponse, "description": "Validation error"},
        404: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def login(
    request: Request,
    body: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """
    Exchange email and password for a token.

    An unknown email and a wrong password produce the same error.
    """
    token = await service.authenticate(body.email, body.password)
    return TokenResponse(token=token)
