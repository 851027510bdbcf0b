"""Password hashing with passlib."""

from passlib.context import CryptContext

from core.config import settings


class PasswordHasher:
    """bcrypt hashing; every call to ``hash`` uses a fresh salt."""

    def __init__(self, rounds: int = settings.bcrypt_rounds) -> None:
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        return self._context.verify(password, password_hash)
