"""Thought service layer with business logic."""

from collections.abc import Callable
from uuid import UUID

from core.exceptions import InvalidThoughtError, ProfileNotFoundError, ThoughtNotFoundError
from domain.entities.thought import MAX_THOUGHT_LENGTH, Thought, ThoughtView
from domain.repositories.unit_of_work import IUnitOfWork


class ThoughtService:
    """Service layer for Thought business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def post(self, author_id: UUID, content: str) -> Thought:
        """Publish a thought. Content is trimmed and must be 1..280 chars."""
        content = content.strip()
        if not content or len(content) > MAX_THOUGHT_LENGTH:
            raise InvalidThoughtError(MAX_THOUGHT_LENGTH)

        async with self._uow_factory() as uow:
            created = await uow.thoughts.create(Thought(author_id=author_id, content=content))
            await uow.commit()
            return created

    async def delete(self, thought_id: UUID, author_id: UUID) -> None:
        """Delete a thought. Only its author may delete it."""
        async with self._uow_factory() as uow:
            deleted = await uow.thoughts.delete(thought_id, author_id)
            if not deleted:
                raise ThoughtNotFoundError(str(thought_id))
            await uow.commit()

    async def get_feed(self, limit: int = 50) -> list[ThoughtView]:
        """Global feed of recent thoughts with their authors."""
        async with self._uow_factory() as uow:
            return await uow.thoughts.list_recent(limit)

    async def get_by_handle(self, handle: str, limit: int = 50) -> list[Thought]:
        """A profile's thoughts, newest first."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_handle(handle.strip().lower())
            if not profile:
                raise ProfileNotFoundError(handle)
            return await uow.thoughts.list_by_author(profile.id, limit)
