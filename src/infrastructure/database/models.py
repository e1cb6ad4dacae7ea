"""SQLAlchemy ORM models.

Every foreign key to ``profiles.id`` cascades on update, so re-keying a
profile is a single UPDATE that keeps its thoughts, follows and
notifications attached.
"""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# Constraint names are matched when translating IntegrityError messages.
PROFILES_HANDLE_INDEX = "uq_profiles_handle_lower"
PROFILES_EMAIL_CONSTRAINT = "uq_profiles_email"


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class ProfileModel(Base):
    """User profile model (one row per Supabase auth user)."""

    __tablename__ = "profiles"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    handle: Mapped[str] = mapped_column(String(80), nullable=False)
    display_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255))
    bio: Mapped[str | None] = mapped_column(Text)
    avatar_url: Mapped[str | None] = mapped_column(String(500))
    bookmarked_ids: Mapped[list[Any]] = mapped_column(JSONB, default=list)
    joined_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    # Relationships
    thoughts: Mapped[list["ThoughtModel"]] = relationship(
        "ThoughtModel",
        back_populates="author",
        passive_deletes=True,
        passive_updates=True,
    )


# Handles and emails are unique regardless of case.
Index(PROFILES_HANDLE_INDEX, func.lower(ProfileModel.handle), unique=True)
Index(PROFILES_EMAIL_CONSTRAINT, func.lower(ProfileModel.email), unique=True)


class ThoughtModel(Base):
    """Thought (short text post) model."""

    __tablename__ = "thoughts"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    author_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )
    content: Mapped[str] = mapped_column(
        String(280),
        CheckConstraint("length(content) BETWEEN 1 AND 280", name="ck_thoughts_content_length"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, index=True
    )

    # Relationships
    author: Mapped["ProfileModel"] = relationship("ProfileModel", back_populates="thoughts")


class FollowModel(Base):
    """Follow edge model (composite PK on follower_id + following_id)."""

    __tablename__ = "follows"
    __table_args__ = (
        CheckConstraint("follower_id <> following_id", name="ck_follows_no_self"),
    )

    follower_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
    )
    following_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class NotificationModel(Base):
    """Notification model (one row per recipient)."""

    __tablename__ = "notifications"
    __table_args__ = (
        Index("idx_notifications_recipient_created", "recipient_id", "created_at"),
        Index(
            "idx_notifications_dedup",
            "recipient_id",
            "sender_id",
            "kind",
            "created_at",
        ),
    )

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    recipient_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    sender_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    kind: Mapped[str] = mapped_column(
        String(20),
        CheckConstraint("kind IN ('follow', 'bookmark')", name="ck_notifications_kind"),
        nullable=False,
    )
    subject_ref: Mapped[UUID | None] = mapped_column(PG_UUID(as_uuid=True))
    is_read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    sender: Mapped["ProfileModel"] = relationship("ProfileModel", foreign_keys=[sender_id])
