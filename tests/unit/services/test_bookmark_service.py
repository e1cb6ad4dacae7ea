"""Unit tests for Bookmark service layer."""

from uuid import UUID, uuid4

import pytest

from core.exceptions import ProfileNotFoundError, ThoughtNotFoundError
from domain.entities.notification import NotificationKinds
from domain.entities.profile import Profile
from domain.entities.thought import Thought
from domain.services.bookmark_service import BookmarkService
from domain.services.notification_service import NotificationService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> BookmarkService:
    return BookmarkService(lambda: uow, notification_service=NotificationService(lambda: uow))


@pytest.fixture
def owner(profile_id: UUID) -> Profile:
    return Profile(id=profile_id, handle="owner", display_name="Owner")


@pytest.fixture
def thought(other_id: UUID) -> Thought:
    return Thought(author_id=other_id, content="worth keeping")


class TestAdd:
    @pytest.mark.asyncio
    async def test_adds_and_notifies_author(
        self,
        service: BookmarkService,
        uow: FakeUnitOfWork,
        owner: Profile,
        thought: Thought,
    ) -> None:
        uow.profiles.get.return_value = owner
        uow.thoughts.get.return_value = thought
        uow.notifications.get_recent_duplicate.return_value = None

        assert await service.add(owner.id, thought.id) is True

        saved = uow.profiles.update.call_args.args[0]
        assert thought.id in saved.bookmarked_ids
        notification = uow.notifications.create.call_args.args[0]
        assert notification.kind == NotificationKinds.BOOKMARK
        assert notification.recipient_id == thought.author_id
        assert notification.subject_ref == thought.id
        assert uow.committed

    @pytest.mark.asyncio
    async def test_already_bookmarked_is_idempotent(
        self,
        service: BookmarkService,
        uow: FakeUnitOfWork,
        owner: Profile,
        thought: Thought,
    ) -> None:
        owner.bookmarked_ids.add(thought.id)
        uow.profiles.get.return_value = owner
        uow.thoughts.get.return_value = thought

        assert await service.add(owner.id, thought.id) is False

        uow.profiles.update.assert_not_called()
        uow.notifications.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_own_thought_does_not_notify(
        self, service: BookmarkService, uow: FakeUnitOfWork, owner: Profile
    ) -> None:
        mine = Thought(author_id=owner.id, content="note to self")
        uow.profiles.get.return_value = owner
        uow.thoughts.get.return_value = mine

        assert await service.add(owner.id, mine.id) is True

        uow.notifications.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_thought_raises(
        self, service: BookmarkService, uow: FakeUnitOfWork, owner: Profile
    ) -> None:
        uow.profiles.get.return_value = owner
        uow.thoughts.get.return_value = None

        with pytest.raises(ThoughtNotFoundError):
            await service.add(owner.id, uuid4())

    @pytest.mark.asyncio
    async def test_unknown_profile_raises(
        self, service: BookmarkService, uow: FakeUnitOfWork, profile_id: UUID
    ) -> None:
        uow.profiles.get.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.add(profile_id, uuid4())


class TestRemoveAndList:
    @pytest.mark.asyncio
    async def test_remove_present(
        self, service: BookmarkService, uow: FakeUnitOfWork, owner: Profile
    ) -> None:
        thought_id = uuid4()
        owner.bookmarked_ids.add(thought_id)
        uow.profiles.get.return_value = owner

        assert await service.remove(owner.id, thought_id) is True

        saved = uow.profiles.update.call_args.args[0]
        assert thought_id not in saved.bookmarked_ids
        assert uow.committed

    @pytest.mark.asyncio
    async def test_remove_absent_is_idempotent(
        self, service: BookmarkService, uow: FakeUnitOfWork, owner: Profile
    ) -> None:
        uow.profiles.get.return_value = owner

        assert await service.remove(owner.id, uuid4()) is False
        uow.profiles.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_bookmarks_skip_thought_lookup(
        self, service: BookmarkService, uow: FakeUnitOfWork, owner: Profile
    ) -> None:
        uow.profiles.get.return_value = owner

        assert await service.get_bookmarks(owner.id) == []
        uow.thoughts.list_views.assert_not_called()

    @pytest.mark.asyncio
    async def test_lists_bookmarked_views(
        self, service: BookmarkService, uow: FakeUnitOfWork, owner: Profile
    ) -> None:
        thought_id = uuid4()
        owner.bookmarked_ids.add(thought_id)
        uow.profiles.get.return_value = owner
        uow.thoughts.list_views.return_value = []

        await service.get_bookmarks(owner.id)

        uow.thoughts.list_views.assert_called_once_with([thought_id])
