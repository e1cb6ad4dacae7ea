"""SQLAlchemy implementation of Profile repository."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Profile
from infrastructure.database.errors import translate_db_errors
from infrastructure.database.models import ProfileModel


def profile_to_entity(model: ProfileModel) -> Profile:
    """Convert ORM model to domain entity."""
    return Profile(
        id=model.id,
        handle=model.handle,
        display_name=model.display_name,
        email=model.email,
        bio=model.bio,
        avatar_url=model.avatar_url,
        bookmarked_ids={UUID(str(ref)) for ref in model.bookmarked_ids or []},
        joined_at=model.joined_at,
        updated_at=model.updated_at,
    )


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @translate_db_errors
    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID."""
        stmt = (
            select(ProfileModel)
            .where(ProfileModel.id == id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return profile_to_entity(model) if model else None

    @translate_db_errors
    async def get_by_handle(self, handle: str) -> Profile | None:
        """Get a profile by handle (case-insensitive)."""
        stmt = select(ProfileModel).where(func.lower(ProfileModel.handle) == handle.lower())
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return profile_to_entity(model) if model else None

    @translate_db_errors
    async def get_by_email(self, email: str) -> Profile | None:
        """Get a profile by email (case-insensitive)."""
        stmt = select(ProfileModel).where(
            func.lower(ProfileModel.email) == email.strip().lower()
        )
        result = await self._session.execute(stmt)
        model = result.scalars().first()
        return profile_to_entity(model) if model else None

    @translate_db_errors
    async def get_many(self, ids: list[UUID]) -> list[Profile]:
        """Get all profiles whose ID is in ``ids``."""
        if not ids:
            return []
        stmt = select(ProfileModel).where(ProfileModel.id.in_(ids))
        result = await self._session.execute(stmt)
        return [profile_to_entity(model) for model in result.scalars()]

    @translate_db_errors
    async def create(self, profile: Profile) -> Profile:
        """Insert a new profile. Unique violations surface at flush."""
        model = self._to_model(profile)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return profile_to_entity(model)

    @translate_db_errors
    async def update(self, profile: Profile) -> Profile:
        """Update mutable fields of an existing profile."""
        stmt = select(ProfileModel).where(ProfileModel.id == profile.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Profile {profile.id} not found")

        model.handle = profile.handle
        model.display_name = profile.display_name
        model.bio = profile.bio
        model.avatar_url = profile.avatar_url
        model.bookmarked_ids = sorted(str(ref) for ref in profile.bookmarked_ids)
        model.updated_at = profile.updated_at

        await self._session.flush()
        return profile_to_entity(model)

    @translate_db_errors
    async def rekey(self, old_id: UUID, new_id: UUID, email: str | None) -> Profile | None:
        """Move a profile to a new primary key in one UPDATE.

        Thoughts, follows and notifications follow through ON UPDATE CASCADE.
        """
        stmt = (
            update(ProfileModel)
            .where(ProfileModel.id == old_id)
            .values(id=new_id, email=email, updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.get(new_id)

    @translate_db_errors
    async def count(self) -> int:
        """Count all profiles."""
        stmt = select(func.count()).select_from(ProfileModel)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            handle=entity.handle,
            display_name=entity.display_name,
            email=entity.email,
            bio=entity.bio,
            avatar_url=entity.avatar_url,
            bookmarked_ids=sorted(str(ref) for ref in entity.bookmarked_ids),
            joined_at=entity.joined_at,
            updated_at=entity.updated_at,
        )
