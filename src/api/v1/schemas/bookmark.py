"""Pydantic schemas for Bookmark API."""

from uuid import UUID

from pydantic import BaseModel


class BookmarkResponse(BaseModel):
    """Bookmark state of a thought for the caller."""

    thought_id: UUID
    bookmarked: bool
    changed: bool
