"""Shared fixtures for unit tests."""

import asyncio
from dataclasses import replace
from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from core.exceptions import StorageUnavailableError, UniqueViolationError
from domain.entities.principal import Principal
from domain.entities.profile import Profile


class FakeUnitOfWork:
    """Fake Unit of Work with all 4 repository mocks for unit testing."""

    def __init__(self) -> None:
        self.profiles = AsyncMock()
        self.thoughts = AsyncMock()
        self.follows = AsyncMock()
        self.notifications = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


def _copy(profile: Profile) -> Profile:
    return replace(profile, bookmarked_ids=set(profile.bookmarked_ids))


class InMemoryProfileRepository:
    """Profile store with the real unique constraints (id, lower(handle), lower(email)).

    Every call yields to the event loop first so concurrent callers
    interleave the way they would against a real database.
    """

    def __init__(self) -> None:
        self.rows: dict[UUID, Profile] = {}
        self.inserts = 0
        self.rekeys = 0
        self.fail = False

    async def _io(self) -> None:
        await asyncio.sleep(0)
        if self.fail:
            raise StorageUnavailableError()

    async def get(self, id: UUID) -> Profile | None:
        await self._io()
        profile = self.rows.get(id)
        return _copy(profile) if profile else None

    async def get_by_handle(self, handle: str) -> Profile | None:
        await self._io()
        for profile in self.rows.values():
            if profile.handle.lower() == handle.lower():
                return _copy(profile)
        return None

    async def get_by_email(self, email: str) -> Profile | None:
        await self._io()
        for profile in self.rows.values():
            if profile.email and profile.email.lower() == email.strip().lower():
                return _copy(profile)
        return None

    async def get_many(self, ids: list[UUID]) -> list[Profile]:
        await self._io()
        return [_copy(self.rows[i]) for i in ids if i in self.rows]

    def _check_unique(self, profile: Profile, exclude: UUID | None = None) -> None:
        for other in self.rows.values():
            if other.id == exclude:
                continue
            if other.handle.lower() == profile.handle.lower():
                raise UniqueViolationError("handle")
            if profile.email and other.email and other.email.lower() == profile.email.lower():
                raise UniqueViolationError("email")

    async def create(self, profile: Profile) -> Profile:
        await self._io()
        if profile.id in self.rows:
            raise UniqueViolationError("id")
        self._check_unique(profile)
        self.rows[profile.id] = _copy(profile)
        self.inserts += 1
        return _copy(profile)

    async def update(self, profile: Profile) -> Profile:
        await self._io()
        self._check_unique(profile, exclude=profile.id)
        self.rows[profile.id] = _copy(profile)
        return _copy(profile)

    async def rekey(self, old_id: UUID, new_id: UUID, email: str | None) -> Profile | None:
        await self._io()
        if old_id not in self.rows:
            return None
        if new_id in self.rows:
            raise UniqueViolationError("id")
        profile = self.rows.pop(old_id)
        profile.id = new_id
        profile.email = email
        self.rows[new_id] = profile
        self.rekeys += 1
        return _copy(profile)

    async def count(self) -> int:
        await self._io()
        return len(self.rows)


class MemoryUnitOfWork:
    """Unit of Work over a shared in-memory profile store (writes are immediate)."""

    def __init__(self, profiles: InMemoryProfileRepository) -> None:
        self.profiles = profiles
        self.thoughts = AsyncMock()
        self.follows = AsyncMock()
        self.notifications = AsyncMock()
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1

    async def __aenter__(self) -> "MemoryUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def profile_store() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def memory_uow_factory(profile_store: InMemoryProfileRepository) -> Any:
    """A UoW factory whose units all share ``profile_store``."""
    return lambda: MemoryUnitOfWork(profile_store)


@pytest.fixture
def profile_id() -> UUID:
    """A random profile ID."""
    return uuid4()


@pytest.fixture
def other_id() -> UUID:
    """A random profile ID (distinct from profile_id)."""
    return uuid4()


@pytest.fixture
def principal() -> Principal:
    """A confirmed principal with a display name hint."""
    return Principal(
        principal_id=UUID("ab12cd34-0000-4000-8000-000000000001"),
        email="Jane.Doe@Example.com",
        email_confirmed=True,
        metadata={"name": "Jane Doe"},
    )
