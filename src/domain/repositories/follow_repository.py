"""Follow repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.follow import Follow
from domain.entities.profile import Profile


class IFollowRepository(Protocol):
    """Repository interface for follow edges."""

    async def add(self, follow: Follow) -> bool:
        """Insert an edge. Returns False if it already existed."""
        ...

    async def remove(self, follower_id: UUID, following_id: UUID) -> bool:
        """Delete an edge. Returns False if it did not exist."""
        ...

    async def exists(self, follower_id: UUID, following_id: UUID) -> bool:
        """Check whether ``follower_id`` follows ``following_id``."""
        ...

    async def count_followers(self, profile_id: UUID) -> int:
        """Count edges pointing at ``profile_id``."""
        ...

    async def count_following(self, profile_id: UUID) -> int:
        """Count edges starting at ``profile_id``."""
        ...

    async def list_followers(self, profile_id: UUID) -> list[Profile]:
        """Profiles following ``profile_id``, most recent first."""
        ...

    async def list_following(self, profile_id: UUID) -> list[Profile]:
        """Profiles followed by ``profile_id``, most recent first."""
        ...
