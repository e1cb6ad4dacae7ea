"""Pydantic schemas for Profile API."""

from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ProfileUpdate(BaseModel):
    """Schema for editing the caller's profile (all fields optional).

    Blank name/handle and handle rules are checked by the service so the
    error codes match the rest of the API.
    """

    display_name: Optional[str] = Field(None, max_length=100)
    handle: Optional[str] = Field(None, max_length=40)
    bio: Optional[str] = Field(None, max_length=160)


class ProfileResponse(BaseModel):
    """Public profile fields."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "handle": "jane_doe",
                "display_name": "Jane Doe",
                "bio": "Thinking out loud",
                "avatar_url": None,
                "joined_at": "2026-02-01T10:00:00",
            }
        },
    )

    id: UUID
    handle: str
    display_name: str
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    joined_at: datetime


class MeResponse(ProfileResponse):
    """The caller's own profile, including private fields."""

    email: Optional[str] = None
    updated_at: datetime


class ProfileStatsResponse(BaseModel):
    """Public counters."""

    model_config = ConfigDict(from_attributes=True)

    thoughts: int
    followers: int
    following: int


class ProfileDetailResponse(BaseModel):
    """Schema for a public profile page."""

    data: ProfileResponse
    stats: ProfileStatsResponse


class MeDetailResponse(BaseModel):
    """Schema for the caller's profile response."""

    data: MeResponse


class ProfileListResponse(BaseModel):
    """Schema for a list of profiles (followers, following)."""

    data: List[ProfileResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class EmailCheckResponse(BaseModel):
    """Whether a profile exists for an email."""

    registered: bool


class HandleCheckResponse(BaseModel):
    """Whether a handle is free."""

    handle: str
    available: bool
