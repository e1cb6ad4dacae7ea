"""SQLAlchemy implementation of Notification repository."""

from datetime import datetime, timedelta
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.notification import Notification, NotificationView
from infrastructure.database.errors import translate_db_errors
from infrastructure.database.models import NotificationModel, ProfileModel


class SQLAlchemyNotificationRepository:
    """SQLAlchemy implementation of INotificationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @translate_db_errors
    async def create(self, notification: Notification) -> Notification:
        """Create a new notification."""
        model = self._to_model(notification)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    @translate_db_errors
    async def get_recent_duplicate(
        self,
        recipient_id: UUID,
        sender_id: UUID,
        kind: str,
        subject_ref: UUID | None,
        window_seconds: int = 300,
    ) -> Notification | None:
        """Check for a recent identical notification for deduplication."""
        cutoff = datetime.utcnow() - timedelta(seconds=window_seconds)
        stmt = (
            select(NotificationModel)
            .where(
                NotificationModel.recipient_id == recipient_id,
                NotificationModel.sender_id == sender_id,
                NotificationModel.kind == kind,
                NotificationModel.created_at > cutoff,
            )
            .order_by(NotificationModel.created_at.desc())
            .limit(1)
        )
        if subject_ref is None:
            stmt = stmt.where(NotificationModel.subject_ref.is_(None))
        else:
            stmt = stmt.where(NotificationModel.subject_ref == subject_ref)

        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    @translate_db_errors
    async def list_for_recipient(
        self,
        recipient_id: UUID,
        unread_only: bool = False,
        limit: int = 50,
    ) -> list[NotificationView]:
        """Get a recipient's notification feed joined with senders."""
        stmt = (
            select(NotificationModel, ProfileModel)
            .outerjoin(ProfileModel, NotificationModel.sender_id == ProfileModel.id)
            .where(NotificationModel.recipient_id == recipient_id)
        )
        if unread_only:
            stmt = stmt.where(NotificationModel.is_read.is_(False))

        stmt = stmt.order_by(NotificationModel.created_at.desc()).limit(limit)

        result = await self._session.execute(stmt)
        return [self._to_view(n_model, sender) for n_model, sender in result.all()]

    @translate_db_errors
    async def get_unread_count(self, recipient_id: UUID) -> int:
        """Get the count of unread notifications for a recipient."""
        stmt = select(func.count(NotificationModel.id)).where(
            NotificationModel.recipient_id == recipient_id,
            NotificationModel.is_read.is_(False),
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    @translate_db_errors
    async def mark_read(self, id: UUID, recipient_id: UUID) -> bool:
        """Mark a notification as read for its recipient."""
        stmt = (
            update(NotificationModel)
            .where(
                NotificationModel.id == id,
                NotificationModel.recipient_id == recipient_id,
            )
            .values(is_read=True)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0  # type: ignore[return-value]

    @translate_db_errors
    async def mark_all_read(self, recipient_id: UUID) -> int:
        """Mark all notifications as read for a recipient. Returns count updated."""
        stmt = (
            update(NotificationModel)
            .where(
                NotificationModel.recipient_id == recipient_id,
                NotificationModel.is_read.is_(False),
            )
            .values(is_read=True)
        )
        result = await self._session.execute(stmt)
        return result.rowcount  # type: ignore[return-value]

    # --- Conversion methods ---

    def _to_entity(self, model: NotificationModel) -> Notification:
        """Convert NotificationModel to domain entity."""
        return Notification(
            id=model.id,
            recipient_id=model.recipient_id,
            sender_id=model.sender_id,
            kind=model.kind,
            subject_ref=model.subject_ref,
            is_read=model.is_read,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Notification) -> NotificationModel:
        """Convert Notification domain entity to ORM model."""
        return NotificationModel(
            id=entity.id,
            recipient_id=entity.recipient_id,
            sender_id=entity.sender_id,
            kind=entity.kind,
            subject_ref=entity.subject_ref,
            is_read=entity.is_read,
            created_at=entity.created_at,
        )

    def _to_view(self, model: NotificationModel, sender: ProfileModel | None) -> NotificationView:
        """Join a notification with its sender's public fields."""
        return NotificationView(
            id=model.id,
            kind=model.kind,
            subject_ref=model.subject_ref,
            is_read=model.is_read,
            created_at=model.created_at,
            sender_id=model.sender_id,
            sender_handle=sender.handle if sender else None,
            sender_display_name=sender.display_name if sender else None,
            sender_avatar_url=sender.avatar_url if sender else None,
        )
