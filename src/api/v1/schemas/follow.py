"""Pydantic schemas for Follow API."""

from uuid import UUID

from pydantic import BaseModel


class FollowResponse(BaseModel):
    """Follow state between the caller and a profile."""

    profile_id: UUID
    following: bool
    changed: bool
