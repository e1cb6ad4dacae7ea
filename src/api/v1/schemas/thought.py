"""Pydantic schemas for Thought API."""

from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.thought import MAX_THOUGHT_LENGTH, ThoughtView


class ThoughtCreate(BaseModel):
    """Schema for posting a Thought. Content is trimmed by the service."""

    content: str = Field(..., min_length=1, max_length=MAX_THOUGHT_LENGTH * 2)


class ThoughtResponse(BaseModel):
    """Schema for a Thought without author details."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    author_id: UUID
    content: str
    created_at: datetime


class ThoughtAuthor(BaseModel):
    """Author fields embedded in feed items."""

    id: UUID
    handle: str
    display_name: str
    avatar_url: Optional[str] = None


class ThoughtFeedItem(BaseModel):
    """Schema for a Thought joined with its author."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "content": "First thought!",
                "created_at": "2026-02-01T10:00:00",
                "author": {
                    "id": "456e4567-e89b-12d3-a456-426614174000",
                    "handle": "jane_doe",
                    "display_name": "Jane Doe",
                    "avatar_url": None,
                },
            }
        },
    )

    id: UUID
    content: str
    created_at: datetime
    author: ThoughtAuthor


class ThoughtDetailResponse(BaseModel):
    """Schema for single Thought response."""

    data: ThoughtResponse


class ThoughtListResponse(BaseModel):
    """Schema for a list of a profile's Thoughts."""

    data: List[ThoughtResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class ThoughtFeedResponse(BaseModel):
    """Schema for a feed of Thoughts with authors."""

    data: List[ThoughtFeedItem]
    meta: dict[str, Any] = Field(default_factory=dict)


def feed_item(view: ThoughtView) -> ThoughtFeedItem:
    """Build a feed item from a joined thought view."""
    return ThoughtFeedItem(
        id=view.id,
        content=view.content,
        created_at=view.created_at,
        author=ThoughtAuthor(
            id=view.author_id,
            handle=view.author_handle,
            display_name=view.author_display_name,
            avatar_url=view.author_avatar_url,
        ),
    )
