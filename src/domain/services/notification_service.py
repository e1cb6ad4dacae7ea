"""Notification service layer for creating and managing notifications."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import NotificationNotFoundError
from domain.entities.notification import Notification, NotificationView
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

DEDUP_WINDOW_SECONDS = 300  # 5 minutes


class NotificationService:
    """Service layer for notification creation and management."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    # --- In-transaction notification creation ---

    async def notify(
        self,
        uow: IUnitOfWork,
        kind: str,
        sender_id: UUID,
        recipient_id: UUID,
        subject_ref: UUID | None = None,
    ) -> Notification | None:
        """Create a notification within an existing UoW transaction.

        Called from other services inside their own transaction; the caller
        commits.

        Returns:
            The created Notification, or None if skipped (self-notification
            or a duplicate inside the dedup window).
        """
        if sender_id == recipient_id:
            return None

        recent = await uow.notifications.get_recent_duplicate(
            recipient_id=recipient_id,
            sender_id=sender_id,
            kind=kind,
            subject_ref=subject_ref,
            window_seconds=DEDUP_WINDOW_SECONDS,
        )
        if recent:
            logger.debug(
                "notification_deduplicated",
                kind=kind,
                recipient_id=str(recipient_id),
            )
            return None

        notification = Notification(
            recipient_id=recipient_id,
            sender_id=sender_id,
            kind=kind,
            subject_ref=subject_ref,
        )
        return await uow.notifications.create(notification)

    # --- Read methods (use own UoW context) ---

    async def get_notifications(
        self,
        recipient_id: UUID,
        unread_only: bool = False,
        limit: int = 50,
    ) -> tuple[list[NotificationView], int]:
        """Get a recipient's notification feed.

        Returns:
            Tuple of (notification_list, unread_count).
        """
        async with self._uow_factory() as uow:
            notifications = await uow.notifications.list_for_recipient(
                recipient_id=recipient_id,
                unread_only=unread_only,
                limit=limit,
            )
            unread_count = await uow.notifications.get_unread_count(recipient_id)
            return notifications, unread_count

    async def get_unread_count(self, recipient_id: UUID) -> int:
        """Get the count of unread notifications."""
        async with self._uow_factory() as uow:
            return await uow.notifications.get_unread_count(recipient_id)

    async def mark_read(self, notification_id: UUID, recipient_id: UUID) -> None:
        """Mark a notification as read. Only its recipient may do so."""
        async with self._uow_factory() as uow:
            success = await uow.notifications.mark_read(notification_id, recipient_id)
            if not success:
                raise NotificationNotFoundError(str(notification_id))
            await uow.commit()

    async def mark_all_read(self, recipient_id: UUID) -> int:
        """Mark all of a recipient's notifications as read."""
        async with self._uow_factory() as uow:
            count = await uow.notifications.mark_all_read(recipient_id)
            await uow.commit()
            return count
