"""Bookmark service layer.

Bookmarks live on the owning profile as a set of thought ids and are changed
by read-modify-write of that row. Two concurrent toggles by the same user can
lose one update; last write wins.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Optional
from uuid import UUID

from core.exceptions import ProfileNotFoundError, ThoughtNotFoundError
from domain.entities.notification import NotificationKinds
from domain.entities.thought import ThoughtView
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.notification_service import NotificationService


class BookmarkService:
    """Service layer for a profile's bookmarked thoughts."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        notification_service: Optional["NotificationService"] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._notification = notification_service

    async def get_bookmarks(self, profile_id: UUID) -> list[ThoughtView]:
        """Bookmarked thoughts that still exist, newest first."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(str(profile_id))
            if not profile.bookmarked_ids:
                return []
            return await uow.thoughts.list_views(list(profile.bookmarked_ids))

    async def add(self, profile_id: UUID, thought_id: UUID) -> bool:
        """Bookmark a thought. Idempotent; notifies the author on first add.

        Returns:
            True if the bookmark was added, False if it was already present.
        """
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(str(profile_id))

            thought = await uow.thoughts.get(thought_id)
            if not thought:
                raise ThoughtNotFoundError(str(thought_id))

            if thought_id in profile.bookmarked_ids:
                return False

            profile.bookmarked_ids.add(thought_id)
            profile.updated_at = datetime.utcnow()
            await uow.profiles.update(profile)

            if self._notification:
                await self._notification.notify(
                    uow=uow,
                    kind=NotificationKinds.BOOKMARK,
                    sender_id=profile_id,
                    recipient_id=thought.author_id,
                    subject_ref=thought_id,
                )

            await uow.commit()
            return True

    async def remove(self, profile_id: UUID, thought_id: UUID) -> bool:
        """Remove a bookmark. Idempotent; the thought need not exist anymore."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(str(profile_id))

            if thought_id not in profile.bookmarked_ids:
                return False

            profile.bookmarked_ids.discard(thought_id)
            profile.updated_at = datetime.utcnow()
            await uow.profiles.update(profile)
            await uow.commit()
            return True
