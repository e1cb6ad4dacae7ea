"""SQLAlchemy implementation of Thought repository."""

from uuid import UUID

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.thought import Thought, ThoughtView
from infrastructure.database.errors import translate_db_errors
from infrastructure.database.models import ProfileModel, ThoughtModel


class SQLAlchemyThoughtRepository:
    """SQLAlchemy implementation of IThoughtRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @translate_db_errors
    async def get(self, id: UUID) -> Thought | None:
        """Get a thought by ID."""
        stmt = select(ThoughtModel).where(ThoughtModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    @translate_db_errors
    async def create(self, thought: Thought) -> Thought:
        """Create a new thought."""
        model = ThoughtModel(
            id=thought.id,
            author_id=thought.author_id,
            content=thought.content,
            created_at=thought.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    @translate_db_errors
    async def delete(self, id: UUID, author_id: UUID) -> bool:
        """Delete a thought if it belongs to ``author_id``."""
        stmt = delete(ThoughtModel).where(
            ThoughtModel.id == id,
            ThoughtModel.author_id == author_id,
        )
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    @translate_db_errors
    async def list_by_author(self, author_id: UUID, limit: int = 50) -> list[Thought]:
        """List an author's thoughts, newest first."""
        stmt = (
            select(ThoughtModel)
            .where(ThoughtModel.author_id == author_id)
            .order_by(ThoughtModel.created_at.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    @translate_db_errors
    async def count_by_author(self, author_id: UUID) -> int:
        """Count an author's thoughts."""
        stmt = (
            select(func.count())
            .select_from(ThoughtModel)
            .where(ThoughtModel.author_id == author_id)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    @translate_db_errors
    async def list_recent(self, limit: int = 50) -> list[ThoughtView]:
        """Global feed: recent thoughts joined with their authors."""
        stmt = self._view_query().limit(limit)
        result = await self._session.execute(stmt)
        return [self._to_view(thought, author) for thought, author in result.all()]

    @translate_db_errors
    async def list_views(self, ids: list[UUID]) -> list[ThoughtView]:
        """Thoughts with the given IDs joined with their authors, newest first."""
        if not ids:
            return []
        stmt = self._view_query().where(ThoughtModel.id.in_(ids))
        result = await self._session.execute(stmt)
        return [self._to_view(thought, author) for thought, author in result.all()]

    def _view_query(self) -> Select[tuple[ThoughtModel, ProfileModel]]:
        return (
            select(ThoughtModel, ProfileModel)
            .join(ProfileModel, ThoughtModel.author_id == ProfileModel.id)
            .order_by(ThoughtModel.created_at.desc())
        )

    def _to_entity(self, model: ThoughtModel) -> Thought:
        """Convert ORM model to domain entity."""
        return Thought(
            id=model.id,
            author_id=model.author_id,
            content=model.content,
            created_at=model.created_at,
        )

    def _to_view(self, thought: ThoughtModel, author: ProfileModel) -> ThoughtView:
        return ThoughtView(
            id=thought.id,
            content=thought.content,
            created_at=thought.created_at,
            author_id=author.id,
            author_handle=author.handle,
            author_display_name=author.display_name,
            author_avatar_url=author.avatar_url,
        )
