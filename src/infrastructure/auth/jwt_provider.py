"""JWT authentication provider implementation.

Tokens are HS256-signed with the configured secret. Payload structure:
    {
        "sub": "user-uuid",
        "iat": 1234567800,
        "exp": 1234567890
    }
"""

import logging
from datetime import datetime, timedelta
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt

from core.config import settings
from core.exceptions import InvalidTokenError, TokenExpiredError

logger = logging.getLogger(__name__)


class JWTAuthProvider:
    """JWT-based authentication provider.

    Issues and verifies tokens. The secret, algorithm and lifetime are fixed
    at construction; the provider holds no other state.
    """

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    def create_token(self, user_id: UUID) -> str:
        """
        Create a JWT token for a user.

        Args:
            user_id: The user to create a token for

        Returns:
            The generated JWT string
        """
        now = datetime.utcnow()
        payload: dict = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + timedelta(minutes=self._expire_minutes),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def decode_token(self, token: str) -> UUID:
        """
        Verify signature and expiry and return the bound user ID.

        Raises:
            TokenExpiredError: If the token is past its expiry
            InvalidTokenError: For any other verification failure
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require_exp": True, "require_sub": True},
            )
        except ExpiredSignatureError as e:
            logger.debug("Token rejected: expired")
            raise TokenExpiredError() from e
        except JWTError as e:
            logger.debug("Token rejected: %s", e)
            raise InvalidTokenError() from e

        subject = payload.get("sub")
        if not subject or not isinstance(subject, str):
            raise InvalidTokenError("Token has no subject")

        try:
            return UUID(subject)
        except ValueError as e:
            raise InvalidTokenError("Token subject is not a user id") from e
