"""User registration route."""

from fastapi import APIRouter, Depends, Request

from api.rest.dependencies import get_auth_service
from api.rest.schemas.auth import RegisterRequest, TokenResponse
from api.rest.schemas.common import ErrorResponse
from core.rate_limit import WRITE_LIMIT, limiter
from domain.services.auth_service import AuthService

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=TokenResponse,
    summary="Register a user",
    responses={
        200: {"description": "Account created, token issued"},
        400: {"model": ErrorResponse, "description": "Validation error or email already registered"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def register(
    request: Request,
    body: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Create an account with a Gravatar avatar and return a token for it."""
    token = await service.register(body.name, body.email, body.password)
    return TokenResponse(token=token)
