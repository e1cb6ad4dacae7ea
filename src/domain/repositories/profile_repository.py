"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities.

    Writes signal store-level unique constraint violations with
    ``UniqueViolationError``; every other store failure surfaces as
    ``StorageUnavailableError``. A lookup that finds nothing returns None.
    """

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID."""
        ...

    async def get_by_handle(self, handle: str) -> Profile | None:
        """Get a profile by handle (case-insensitive)."""
        ...

    async def get_by_email(self, email: str) -> Profile | None:
        """Get a profile by email (case-insensitive)."""
        ...

    async def get_many(self, ids: list[UUID]) -> list[Profile]:
        """Get all profiles whose ID is in ``ids``."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Insert a new profile."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Update mutable fields of an existing profile."""
        ...

    async def rekey(self, old_id: UUID, new_id: UUID, email: str | None) -> Profile | None:
        """Atomically change a profile's primary key (and refresh its email).

        Dependent rows follow via ON UPDATE CASCADE. Returns None if no row
        had ``old_id``.
        """
        ...

    async def count(self) -> int:
        """Count all profiles."""
        ...
