"""Authentication provider protocol."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID


@dataclass(frozen=True)
class TokenUser:
    """Identity resolved from a verified auth token."""

    id: UUID


class IAuthProvider(Protocol):
    """Protocol for authentication providers."""

    def create_token(self, user_id: UUID) -> str:
        """
        Issue a signed, time-limited token binding a user ID.

        Args:
            user_id: The user to create a token for

        Returns:
            The generated token string
        """
        ...

    def decode_token(self, token: str) -> UUID:
        """
        Verify a token and return the user ID it binds.

        Raises:
            InvalidTokenError: Bad signature, malformed payload or subject
            TokenExpiredError: Token is past its expiry
        """
        ...
