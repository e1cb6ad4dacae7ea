"""SQLAlchemy implementation of Follow repository."""

from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.follow import Follow
from domain.entities.profile import Profile
from infrastructure.database.errors import translate_db_errors
from infrastructure.database.models import FollowModel, ProfileModel
from infrastructure.database.repositories.sqlalchemy_profile_repo import profile_to_entity


class SQLAlchemyFollowRepository:
    """SQLAlchemy implementation of IFollowRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @translate_db_errors
    async def add(self, follow: Follow) -> bool:
        """Insert an edge. Returns False if it already existed."""
        if await self.exists(follow.follower_id, follow.following_id):
            return False

        self._session.add(
            FollowModel(
                follower_id=follow.follower_id,
                following_id=follow.following_id,
                created_at=follow.created_at,
            )
        )
        await self._session.flush()
        return True

    @translate_db_errors
    async def remove(self, follower_id: UUID, following_id: UUID) -> bool:
        """Delete an edge. Returns False if it did not exist."""
        stmt = delete(FollowModel).where(
            FollowModel.follower_id == follower_id,
            FollowModel.following_id == following_id,
        )
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    @translate_db_errors
    async def exists(self, follower_id: UUID, following_id: UUID) -> bool:
        """Check whether ``follower_id`` follows ``following_id``."""
        stmt = select(FollowModel.follower_id).where(
            FollowModel.follower_id == follower_id,
            FollowModel.following_id == following_id,
        )
        result = await self._session.execute(stmt)
        return result.first() is not None

    @translate_db_errors
    async def count_followers(self, profile_id: UUID) -> int:
        """Count edges pointing at ``profile_id``."""
        stmt = (
            select(func.count())
            .select_from(FollowModel)
            .where(FollowModel.following_id == profile_id)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    @translate_db_errors
    async def count_following(self, profile_id: UUID) -> int:
        """Count edges starting at ``profile_id``."""
        stmt = (
            select(func.count())
            .select_from(FollowModel)
            .where(FollowModel.follower_id == profile_id)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    @translate_db_errors
    async def list_followers(self, profile_id: UUID) -> list[Profile]:
        """Profiles following ``profile_id``, most recent first."""
        stmt = (
            select(ProfileModel)
            .join(FollowModel, FollowModel.follower_id == ProfileModel.id)
            .where(FollowModel.following_id == profile_id)
            .order_by(FollowModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [profile_to_entity(model) for model in result.scalars()]

    @translate_db_errors
    async def list_following(self, profile_id: UUID) -> list[Profile]:
        """Profiles followed by ``profile_id``, most recent first."""
        stmt = (
            select(ProfileModel)
            .join(FollowModel, FollowModel.following_id == ProfileModel.id)
            .where(FollowModel.follower_id == profile_id)
            .order_by(FollowModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [profile_to_entity(model) for model in result.scalars()]
