"""Auth service: registration, login and identity lookup."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import InvalidCredentialsError, UserAlreadyExistsError, UserNotFoundError
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.password import PasswordHasher
from infrastructure.auth.provider import IAuthProvider
from infrastructure.avatar.gravatar import gravatar_url

logger = structlog.get_logger()


class AuthService:
    """Service layer for account registration and authentication."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        auth_provider: IAuthProvider,
        password_hasher: PasswordHasher,
    ) -> None:
        self._uow_factory = uow_factory
        self._auth_provider = auth_provider
        self._hasher = password_hasher

    async def register(self, name: str, email: str, password: str) -> str:
        """Create an account and return a token for it."""
        email = email.strip().lower()
        async with self._uow_factory() as uow:
            if await uow.users.get_by_email(email):
                raise UserAlreadyExistsError(email)

            user = User(
                name=name,
                email=email,
                password_hash=self._hasher.hash(password),
                avatar=gravatar_url(email),
            )
            created = await uow.users.create(user)
            await uow.commit()

        logger.info("user_registered", user_id=str(created.id))
        return self._auth_provider.create_token(created.id)

    async def authenticate(self, email: str, password: str) -> str:
        """Check credentials and return a token.

        Unknown email and wrong password fail identically.
        """
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(email)

        if not user or not self._hasher.verify(password, user.password_hash):
            logger.info("login_failed")
            raise InvalidCredentialsError()

        logger.info("user_logged_in", user_id=str(user.id))
        return self._auth_provider.create_token(user.id)

    async def get_user(self, user_id: UUID) -> User:
        """Get the account behind an authenticated identity."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            return user
