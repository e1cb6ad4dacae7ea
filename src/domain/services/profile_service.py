"""Profile service layer: public profiles, edits and avatars."""

import re
import time
from collections.abc import Callable
from datetime import datetime
from uuid import UUID

import structlog

from core.exceptions import (
    HandleTakenError,
    InvalidHandleError,
    MissingFieldsError,
    ProfileNotFoundError,
    UniqueViolationError,
)
from domain.entities.profile import Profile, ProfileStats
from domain.repositories.blob_store import IBlobStore
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.uniqueness_prober import UniquenessProber

logger = structlog.get_logger()

HANDLE_PATTERN = re.compile(r"^[a-z0-9_]{3,20}$")
MAX_BIO_LENGTH = 160


class ProfileService:
    """Service layer for Profile reads and owner-only edits."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        blob_store: IBlobStore | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._uow_factory = uow_factory
        self._blob_store = blob_store
        self._clock = clock

    async def get_by_handle(self, handle: str) -> tuple[Profile, ProfileStats]:
        """Get a public profile and its counters."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_handle(handle.strip().lower())
            if not profile:
                raise ProfileNotFoundError(handle)

            stats = ProfileStats(
                thoughts=await uow.thoughts.count_by_author(profile.id),
                followers=await uow.follows.count_followers(profile.id),
                following=await uow.follows.count_following(profile.id),
            )
            return profile, stats

    async def is_email_registered(self, email: str) -> bool:
        """Whether some profile uses ``email`` (case-insensitive)."""
        async with self._uow_factory() as uow:
            return await uow.profiles.get_by_email(email.strip().lower()) is not None

    async def update(
        self,
        profile_id: UUID,
        display_name: str | None = None,
        handle: str | None = None,
        bio: str | None = None,
    ) -> Profile:
        """Edit the caller's own profile.

        Raises:
            MissingFieldsError: If name or handle is given but blank.
            InvalidHandleError: If the handle breaks the handle rules.
            HandleTakenError: If another profile owns the handle.
        """
        blank = [
            name
            for name, value in (("display_name", display_name), ("handle", handle))
            if value is not None and not value.strip()
        ]
        if blank:
            raise MissingFieldsError(blank)

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(str(profile_id))

            if handle is not None:
                new_handle = handle.strip().lower()
                # Re-submitting the current handle is a no-op.
                if new_handle != profile.handle:
                    if not HANDLE_PATTERN.match(new_handle):
                        raise InvalidHandleError(handle)
                    owner = await uow.profiles.get_by_handle(new_handle)
                    if owner and owner.id != profile_id:
                        raise HandleTakenError(new_handle)
                    profile.handle = new_handle

            if display_name is not None:
                profile.display_name = display_name.strip()
            if bio is not None:
                profile.bio = bio.strip()[:MAX_BIO_LENGTH] or None

            profile.updated_at = datetime.utcnow()
            try:
                updated = await uow.profiles.update(profile)
                await uow.commit()
            except UniqueViolationError:
                await uow.rollback()
                raise HandleTakenError(profile.handle)

            logger.info("profile_updated", profile_id=str(profile_id))
            return updated

    async def is_handle_available(self, handle: str) -> bool:
        """Whether ``handle`` is free (informational, does not reserve)."""
        async with self._uow_factory() as uow:
            return not await UniquenessProber(uow.profiles).is_taken(handle.strip().lower())

    async def upload_avatar(
        self,
        profile_id: UUID,
        data: bytes,
        filename: str | None,
        content_type: str | None = None,
    ) -> Profile:
        """Store an avatar image and point the profile at it."""
        if self._blob_store is None:
            raise RuntimeError("ProfileService has no blob store configured")

        ext = "png"
        if filename and "." in filename:
            ext = filename.rsplit(".", 1)[1].lower() or ext
        path = f"{profile_id}-{int(self._clock() * 1000)}.{ext}"

        url = await self._blob_store.upload(data, path, content_type)

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(str(profile_id))
            profile.avatar_url = url
            profile.updated_at = datetime.utcnow()
            updated = await uow.profiles.update(profile)
            await uow.commit()

        logger.info("avatar_uploaded", profile_id=str(profile_id), path=path)
        return updated
