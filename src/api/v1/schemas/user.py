"""Pydantic schemas for the profile creation endpoint."""

from typing import Any, Literal, Optional

from pydantic import BaseModel

from api.v1.schemas.profile import MeResponse


class UserCreate(BaseModel):
    """Body of ``POST /users``.

    Every field is required and non-blank; presence is checked in the route so
    the 400 lists all missing fields at once.
    """

    id: Optional[str] = None
    name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None

    def missing_fields(self) -> list[str]:
        return [
            field
            for field in ("id", "name", "username", "email")
            if not (getattr(self, field) or "").strip()
        ]


class UserCreateResponse(BaseModel):
    """Outcome of ``POST /users``."""

    status: Literal["created", "skipped"]
    message: str
    data: MeResponse
    meta: dict[str, Any] | None = None
