"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from domain.services.bookmark_service import BookmarkService
from domain.services.follow_service import FollowService
from domain.services.notification_service import NotificationService
from domain.services.profile_reconciler import ProfileReconciler
from domain.services.profile_service import ProfileService
from domain.services.thought_service import ThoughtService
from infrastructure.auth.supabase_auth import SupabaseAuthClient
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.storage.supabase_storage import SupabaseBlobStore


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_profile_reconciler() -> ProfileReconciler:
    """Get Profile reconciler instance."""
    return ProfileReconciler(get_uow_factory())


@lru_cache
def get_notification_service() -> NotificationService:
    """Get Notification service instance."""
    return NotificationService(get_uow_factory())


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory(), blob_store=SupabaseBlobStore())


@lru_cache
def get_thought_service() -> ThoughtService:
    """Get Thought service instance."""
    return ThoughtService(get_uow_factory())


@lru_cache
def get_follow_service() -> FollowService:
    """Get Follow service instance."""
    return FollowService(
        get_uow_factory(),
        notification_service=get_notification_service(),
    )


@lru_cache
def get_bookmark_service() -> BookmarkService:
    """Get Bookmark service instance."""
    return BookmarkService(
        get_uow_factory(),
        notification_service=get_notification_service(),
    )


@lru_cache
def get_auth_client() -> SupabaseAuthClient:
    """Get Supabase auth client instance."""
    return SupabaseAuthClient()
