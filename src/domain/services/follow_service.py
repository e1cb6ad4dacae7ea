"""Follow service layer."""

from collections.abc import Callable
from typing import Optional
from uuid import UUID

import structlog

from core.exceptions import CannotFollowSelfError, ProfileNotFoundError
from domain.entities.follow import Follow
from domain.entities.notification import NotificationKinds
from domain.entities.profile import Profile
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.notification_service import NotificationService

logger = structlog.get_logger()


class FollowService:
    """Service layer for follow edges. Only the follower creates or removes an edge."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        notification_service: Optional["NotificationService"] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._notification = notification_service

    async def follow(self, follower_id: UUID, following_id: UUID) -> bool:
        """Follow a profile. Idempotent.

        Returns:
            True if a new edge was created, False if it already existed.
        """
        if follower_id == following_id:
            raise CannotFollowSelfError()

        async with self._uow_factory() as uow:
            target = await uow.profiles.get(following_id)
            if not target:
                raise ProfileNotFoundError(str(following_id))

            created = await uow.follows.add(
                Follow(follower_id=follower_id, following_id=following_id)
            )
            if created and self._notification:
                await self._notification.notify(
                    uow=uow,
                    kind=NotificationKinds.FOLLOW,
                    sender_id=follower_id,
                    recipient_id=following_id,
                )

            await uow.commit()

        if created:
            logger.info(
                "profile_followed",
                follower_id=str(follower_id),
                following_id=str(following_id),
            )
        return created

    async def unfollow(self, follower_id: UUID, following_id: UUID) -> bool:
        """Remove an edge. Idempotent; returns whether an edge was removed."""
        async with self._uow_factory() as uow:
            removed = await uow.follows.remove(follower_id, following_id)
            await uow.commit()
            return removed

    async def is_following(self, follower_id: UUID, following_id: UUID) -> bool:
        async with self._uow_factory() as uow:
            return await uow.follows.exists(follower_id, following_id)

    async def get_followers(self, profile_id: UUID) -> list[Profile]:
        async with self._uow_factory() as uow:
            return await uow.follows.list_followers(profile_id)

    async def get_following(self, profile_id: UUID) -> list[Profile]:
        async with self._uow_factory() as uow:
            return await uow.follows.list_following(profile_id)
