"""Thought domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

MAX_THOUGHT_LENGTH = 280


@dataclass
class Thought:
    """A short text post, owned by its author and immutable once posted."""

    author_id: UUID
    content: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True, slots=True)
class ThoughtView:
    """Read-only value object: a thought joined with its author for feeds."""

    id: UUID
    content: str
    created_at: datetime
    author_id: UUID
    author_handle: str
    author_display_name: str
    author_avatar_url: str | None
