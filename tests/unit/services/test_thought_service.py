"""Unit tests for Thought service layer."""

from uuid import UUID, uuid4

import pytest

from core.exceptions import InvalidThoughtError, ProfileNotFoundError, ThoughtNotFoundError
from domain.entities.profile import Profile
from domain.entities.thought import MAX_THOUGHT_LENGTH, Thought
from domain.services.thought_service import ThoughtService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> ThoughtService:
    return ThoughtService(lambda: uow)


class TestPost:
    @pytest.mark.asyncio
    async def test_trims_and_creates(
        self, service: ThoughtService, uow: FakeUnitOfWork, profile_id: UUID
    ) -> None:
        uow.thoughts.create.side_effect = lambda t: t

        thought = await service.post(profile_id, "  hello world  ")

        assert thought.content == "hello world"
        assert thought.author_id == profile_id
        assert uow.committed

    @pytest.mark.asyncio
    async def test_accepts_max_length(
        self, service: ThoughtService, uow: FakeUnitOfWork, profile_id: UUID
    ) -> None:
        uow.thoughts.create.side_effect = lambda t: t

        thought = await service.post(profile_id, "x" * MAX_THOUGHT_LENGTH)

        assert len(thought.content) == MAX_THOUGHT_LENGTH

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", "x" * (MAX_THOUGHT_LENGTH + 1)])
    async def test_rejects_empty_or_too_long(
        self, service: ThoughtService, uow: FakeUnitOfWork, profile_id: UUID, content: str
    ) -> None:
        with pytest.raises(InvalidThoughtError):
            await service.post(profile_id, content)

        uow.thoughts.create.assert_not_called()


class TestDelete:
    @pytest.mark.asyncio
    async def test_author_deletes(
        self, service: ThoughtService, uow: FakeUnitOfWork, profile_id: UUID
    ) -> None:
        thought_id = uuid4()
        uow.thoughts.delete.return_value = True

        await service.delete(thought_id, profile_id)

        uow.thoughts.delete.assert_called_once_with(thought_id, profile_id)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_not_author_raises_not_found(
        self, service: ThoughtService, uow: FakeUnitOfWork, other_id: UUID
    ) -> None:
        uow.thoughts.delete.return_value = False

        with pytest.raises(ThoughtNotFoundError):
            await service.delete(uuid4(), other_id)

        assert not uow.committed


class TestReads:
    @pytest.mark.asyncio
    async def test_feed_passes_limit(self, service: ThoughtService, uow: FakeUnitOfWork) -> None:
        uow.thoughts.list_recent.return_value = []

        assert await service.get_feed(limit=5) == []
        uow.thoughts.list_recent.assert_called_once_with(5)

    @pytest.mark.asyncio
    async def test_by_handle_is_case_insensitive(
        self, service: ThoughtService, uow: FakeUnitOfWork, profile_id: UUID
    ) -> None:
        author = Profile(id=profile_id, handle="jane", display_name="Jane")
        thoughts = [Thought(author_id=profile_id, content="hi")]
        uow.profiles.get_by_handle.return_value = author
        uow.thoughts.list_by_author.return_value = thoughts

        result = await service.get_by_handle(" Jane ", limit=10)

        assert result == thoughts
        uow.profiles.get_by_handle.assert_called_once_with("jane")
        uow.thoughts.list_by_author.assert_called_once_with(profile_id, 10)

    @pytest.mark.asyncio
    async def test_by_unknown_handle_raises(
        self, service: ThoughtService, uow: FakeUnitOfWork
    ) -> None:
        uow.profiles.get_by_handle.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.get_by_handle("ghost")
