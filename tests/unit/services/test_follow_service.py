"""Unit tests for Follow service layer."""

from uuid import UUID

import pytest

from core.exceptions import CannotFollowSelfError, ProfileNotFoundError
from domain.entities.notification import NotificationKinds
from domain.entities.profile import Profile
from domain.services.follow_service import FollowService
from domain.services.notification_service import NotificationService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> FollowService:
    return FollowService(lambda: uow)


@pytest.fixture
def notifying_service(uow: FakeUnitOfWork) -> FollowService:
    return FollowService(lambda: uow, notification_service=NotificationService(lambda: uow))


@pytest.fixture
def target(other_id: UUID) -> Profile:
    return Profile(id=other_id, handle="target", display_name="Target")


class TestFollow:
    @pytest.mark.asyncio
    async def test_creates_edge(
        self,
        service: FollowService,
        uow: FakeUnitOfWork,
        profile_id: UUID,
        other_id: UUID,
        target: Profile,
    ) -> None:
        uow.profiles.get.return_value = target
        uow.follows.add.return_value = True

        assert await service.follow(profile_id, other_id) is True

        edge = uow.follows.add.call_args.args[0]
        assert edge.follower_id == profile_id
        assert edge.following_id == other_id
        assert uow.committed

    @pytest.mark.asyncio
    async def test_existing_edge_is_idempotent(
        self,
        notifying_service: FollowService,
        uow: FakeUnitOfWork,
        profile_id: UUID,
        other_id: UUID,
        target: Profile,
    ) -> None:
        uow.profiles.get.return_value = target
        uow.follows.add.return_value = False

        assert await notifying_service.follow(profile_id, other_id) is False

        uow.notifications.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_new_edge_notifies_target(
        self,
        notifying_service: FollowService,
        uow: FakeUnitOfWork,
        profile_id: UUID,
        other_id: UUID,
        target: Profile,
    ) -> None:
        uow.profiles.get.return_value = target
        uow.follows.add.return_value = True
        uow.notifications.get_recent_duplicate.return_value = None

        await notifying_service.follow(profile_id, other_id)

        notification = uow.notifications.create.call_args.args[0]
        assert notification.kind == NotificationKinds.FOLLOW
        assert notification.sender_id == profile_id
        assert notification.recipient_id == other_id

    @pytest.mark.asyncio
    async def test_cannot_follow_self(
        self, service: FollowService, uow: FakeUnitOfWork, profile_id: UUID
    ) -> None:
        with pytest.raises(CannotFollowSelfError):
            await service.follow(profile_id, profile_id)

        uow.follows.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_target_raises(
        self, service: FollowService, uow: FakeUnitOfWork, profile_id: UUID, other_id: UUID
    ) -> None:
        uow.profiles.get.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.follow(profile_id, other_id)


class TestUnfollowAndReads:
    @pytest.mark.asyncio
    async def test_unfollow_reports_removal(
        self, service: FollowService, uow: FakeUnitOfWork, profile_id: UUID, other_id: UUID
    ) -> None:
        uow.follows.remove.return_value = True

        assert await service.unfollow(profile_id, other_id) is True
        uow.follows.remove.assert_called_once_with(profile_id, other_id)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_unfollow_missing_edge_is_idempotent(
        self, service: FollowService, uow: FakeUnitOfWork, profile_id: UUID, other_id: UUID
    ) -> None:
        uow.follows.remove.return_value = False

        assert await service.unfollow(profile_id, other_id) is False

    @pytest.mark.asyncio
    async def test_is_following(
        self, service: FollowService, uow: FakeUnitOfWork, profile_id: UUID, other_id: UUID
    ) -> None:
        uow.follows.exists.return_value = True

        assert await service.is_following(profile_id, other_id) is True

    @pytest.mark.asyncio
    async def test_followers_and_following(
        self, service: FollowService, uow: FakeUnitOfWork, profile_id: UUID, target: Profile
    ) -> None:
        uow.follows.list_followers.return_value = [target]
        uow.follows.list_following.return_value = []

        assert await service.get_followers(profile_id) == [target]
        assert await service.get_following(profile_id) == []
