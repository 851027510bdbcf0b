"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"

    # Ownership errors (401)
    NOT_AUTHORIZED = "NOT_AUTHORIZED"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Not found errors (404)
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    POST_NOT_FOUND = "POST_NOT_FOUND"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"
    EXPERIENCE_NOT_FOUND = "EXPERIENCE_NOT_FOUND"
    EDUCATION_NOT_FOUND = "EDUCATION_NOT_FOUND"
    GITHUB_PROFILE_NOT_FOUND = "GITHUB_PROFILE_NOT_FOUND"

    # Conflict errors (400)
    USER_ALREADY_EXISTS = "USER_ALREADY_EXISTS"
    ALREADY_LIKED = "ALREADY_LIKED"
    NOT_LIKED = "NOT_LIKED"
    CONCURRENT_MODIFICATION = "CONCURRENT_MODIFICATION"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class InvalidTokenError(AuthenticationError):
    """Token signature, structure or subject is invalid."""

    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message=message, error_code=ErrorCode.INVALID_TOKEN)


class TokenExpiredError(AuthenticationError):
    """Token is past its expiry."""

    def __init__(self) -> None:
        super().__init__(message="Token has expired", error_code=ErrorCode.TOKEN_EXPIRED)


class NotAuthorizedError(AppException):
    """Authenticated user does not own the resource."""

    def __init__(self, resource: str = "resource") -> None:
        super().__init__(
            error_code=ErrorCode.NOT_AUTHORIZED,
            message="User not authorized",
            status_code=401,
            details={"resource": resource},
        )


# --- Not found (404) ---


class NotFoundError(AppException):
    """An aggregate or embedded entry does not exist."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=404,
            details=details,
        )


class InvalidCredentialsError(NotFoundError):
    """Email/password pair does not match a user."""

    def __init__(self) -> None:
        super().__init__(ErrorCode.INVALID_CREDENTIALS, "Invalid credentials")


class UserNotFoundError(NotFoundError):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            ErrorCode.USER_NOT_FOUND,
            f"User not found: {user_id}",
            {"user_id": user_id},
        )


class ProfileNotFoundError(NotFoundError):
    """User has no profile."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            ErrorCode.PROFILE_NOT_FOUND,
            "There is no profile for this user",
            {"user_id": user_id},
        )


class PostNotFoundError(NotFoundError):
    """Post not found."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            ErrorCode.POST_NOT_FOUND,
            f"Post not found: {post_id}",
            {"post_id": post_id},
        )


class CommentNotFoundError(NotFoundError):
    """Comment not found on post."""

    def __init__(self, comment_id: str) -> None:
        super().__init__(
            ErrorCode.COMMENT_NOT_FOUND,
            "Comment does not exist",
            {"comment_id": comment_id},
        )


class ExperienceNotFoundError(NotFoundError):
    """Experience entry not found on profile."""

    def __init__(self, experience_id: str) -> None:
        super().__init__(
            ErrorCode.EXPERIENCE_NOT_FOUND,
            f"Experience not found: {experience_id}",
            {"experience_id": experience_id},
        )


class EducationNotFoundError(NotFoundError):
    """Education entry not found on profile."""

    def __init__(self, education_id: str) -> None:
        super().__init__(
            ErrorCode.EDUCATION_NOT_FOUND,
            f"Education not found: {education_id}",
            {"education_id": education_id},
        )


class GitHubProfileNotFoundError(NotFoundError):
    """GitHub did not return repositories for the username."""

    def __init__(self, username: str) -> None:
        super().__init__(
            ErrorCode.GITHUB_PROFILE_NOT_FOUND,
            "No Github profile found",
            {"username": username},
        )


# --- Conflict (400) ---


class ConflictError(AppException):
    """Request conflicts with the current state of the aggregate."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=400,
            details=details,
        )


class UserAlreadyExistsError(ConflictError):
    """Email is already registered."""

    def __init__(self, email: str) -> None:
        super().__init__(
            ErrorCode.USER_ALREADY_EXISTS,
            "User already exists",
            {"email": email},
        )


class AlreadyLikedError(ConflictError):
    """User already liked the post."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            ErrorCode.ALREADY_LIKED,
            "Post already liked",
            {"post_id": post_id},
        )


class NotLikedError(ConflictError):
    """User has not liked the post."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            ErrorCode.NOT_LIKED,
            "Post has not yet been liked",
            {"post_id": post_id},
        )


class ConcurrentModificationError(ConflictError):
    """Aggregate changed between read and write."""

    def __init__(self, aggregate: str, aggregate_id: str) -> None:
        super().__init__(
            ErrorCode.CONCURRENT_MODIFICATION,
            f"The {aggregate} was modified by another request, please retry",
            {"aggregate": aggregate, "id": aggregate_id},
        )


# --- Server (500) ---


class PersistenceError(AppException):
    """The document store failed or is unavailable."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.DATABASE_ERROR,
            message="A database error occurred",
            status_code=500,
        )
