"""Thought repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.thought import Thought, ThoughtView


class IThoughtRepository(Protocol):
    """Repository interface for Thought entities."""

    async def get(self, id: UUID) -> Thought | None:
        """Get a thought by ID."""
        ...

    async def create(self, thought: Thought) -> Thought:
        """Create a new thought."""
        ...

    async def delete(self, id: UUID, author_id: UUID) -> bool:
        """Delete a thought if it belongs to ``author_id``."""
        ...

    async def list_by_author(self, author_id: UUID, limit: int = 50) -> list[Thought]:
        """List an author's thoughts, newest first."""
        ...

    async def count_by_author(self, author_id: UUID) -> int:
        """Count an author's thoughts."""
        ...

    async def list_recent(self, limit: int = 50) -> list[ThoughtView]:
        """Global feed: recent thoughts joined with their authors."""
        ...

    async def list_views(self, ids: list[UUID]) -> list[ThoughtView]:
        """Thoughts with the given IDs joined with their authors, newest first."""
        ...
