"""Notification domain entities and kind constants."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


class NotificationKinds:
    """Notification kind constants."""

    FOLLOW = "follow"
    BOOKMARK = "bookmark"


@dataclass
class Notification:
    """Domain entity for a notification delivered to one recipient."""

    recipient_id: UUID
    sender_id: UUID
    kind: str
    id: UUID = field(default_factory=uuid4)
    subject_ref: UUID | None = None
    is_read: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True, slots=True)
class NotificationView:
    """Read-only value object: notification joined with its sender's profile."""

    id: UUID
    kind: str
    subject_ref: UUID | None
    is_read: bool
    created_at: datetime
    sender_id: UUID
    sender_handle: str | None
    sender_display_name: str | None
    sender_avatar_url: str | None
