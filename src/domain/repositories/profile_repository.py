"""Profile repository protocol."""

from typing import Any, Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile aggregates."""

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID."""
        ...

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        ...

    async def list_all(self) -> list[Profile]:
        """Get all profiles."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Write the whole aggregate, conditional on its version.

        Raises ConcurrentModificationError if the stored version moved.
        """
        ...

    async def update_fields(self, profile: Profile, fields: dict[str, Any]) -> Profile:
        """Write only the given columns, conditional on the profile's version."""
        ...

    async def delete_for_user(self, user_id: UUID) -> bool:
        """Delete a user's profile and return success status."""
        ...
