"""Pydantic schemas for Notification API."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class NotificationSender(BaseModel):
    """Sender fields embedded in a notification. Empty if the sender is gone."""

    id: UUID
    handle: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None


class NotificationResponse(BaseModel):
    """Single notification in the feed."""

    id: UUID
    kind: str  # "follow" or "bookmark"
    subject_ref: UUID | None = None  # bookmarked thought id
    is_read: bool
    created_at: datetime
    sender: NotificationSender


class NotificationListResponse(BaseModel):
    """Notification feed response."""

    data: list[NotificationResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class UnreadCountResponse(BaseModel):
    """Unread notification count response."""

    count: int


class MarkAllReadResponse(BaseModel):
    """Response for mark-all-read operation."""

    count: int  # Number of notifications marked
