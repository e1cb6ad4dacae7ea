"""Notification repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.notification import Notification, NotificationView


class INotificationRepository(Protocol):
    """Repository interface for Notification entities."""

    async def create(self, notification: Notification) -> Notification:
        """Create a new notification."""
        ...

    async def get_recent_duplicate(
        self,
        recipient_id: UUID,
        sender_id: UUID,
        kind: str,
        subject_ref: UUID | None,
        window_seconds: int = 300,
    ) -> Notification | None:
        """Find an identical notification created within the window."""
        ...

    async def list_for_recipient(
        self,
        recipient_id: UUID,
        unread_only: bool = False,
        limit: int = 50,
    ) -> list[NotificationView]:
        """Get a recipient's notifications joined with senders, newest first."""
        ...

    async def get_unread_count(self, recipient_id: UUID) -> int:
        """Count a recipient's unread notifications."""
        ...

    async def mark_read(self, id: UUID, recipient_id: UUID) -> bool:
        """Mark one notification read. False if it is not the recipient's."""
        ...

    async def mark_all_read(self, recipient_id: UUID) -> int:
        """Mark all of a recipient's notifications read. Returns count updated."""
        ...
