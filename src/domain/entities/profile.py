"""Profile domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Profile:
    """Domain entity for the application-owned user record.

    ``id`` equals the Supabase principal id once reconciled. ``handle`` is
    globally unique (case-insensitive) and stored lower-cased.
    """

    handle: str
    display_name: str
    id: UUID = field(default_factory=uuid4)
    email: str | None = None
    bio: str | None = None
    avatar_url: str | None = None
    bookmarked_ids: set[UUID] = field(default_factory=set)
    joined_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as joined_at."""
        if self.updated_at < self.joined_at:
            self.updated_at = self.joined_at


@dataclass(frozen=True, slots=True)
class ProfileStats:
    """Read-only value object: public counters shown on a profile page."""

    thoughts: int
    followers: int
    following: int
