"""Resource ownership checks."""

from typing import Protocol
from uuid import UUID

from core.exceptions import NotAuthorizedError


class Owned(Protocol):
    """Anything with an author/owner id."""

    @property
    def user_id(self) -> UUID: ...


def is_owner(resource: Owned, acting_user_id: UUID) -> bool:
    return resource.user_id == acting_user_id


def ensure_owner(resource: Owned, acting_user_id: UUID, kind: str) -> None:
    """Raise NotAuthorizedError unless ``acting_user_id`` owns ``resource``.

    Callers resolve the resource first; a missing resource is reported as
    not found before this check runs.
    """
    if not is_owner(resource, acting_user_id):
        raise NotAuthorizedError(kind)
