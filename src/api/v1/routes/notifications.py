"""Notification API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentProfile
from api.v1.dependencies import get_notification_service
from api.v1.schemas.notification import (
    MarkAllReadResponse,
    NotificationListResponse,
    NotificationResponse,
    NotificationSender,
    UnreadCountResponse,
)
from core.rate_limit import limiter
from domain.entities.notification import NotificationView
from domain.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _build_notification_response(view: NotificationView) -> NotificationResponse:
    return NotificationResponse(
        id=view.id,
        kind=view.kind,
        subject_ref=view.subject_ref,
        is_read=view.is_read,
        created_at=view.created_at,
        sender=NotificationSender(
            id=view.sender_id,
            handle=view.sender_handle,
            display_name=view.sender_display_name,
            avatar_url=view.sender_avatar_url,
        ),
    )


@router.get(
    "",
    response_model=NotificationListResponse,
    summary="List the caller's notifications",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_notifications(
    request: Request,
    profile: CurrentProfile,
    unread_only: bool = Query(False, description="Only unread notifications"),
    limit: int = Query(50, ge=1, le=100, description="Page size"),
    service: NotificationService = Depends(get_notification_service),
) -> NotificationListResponse:
    """Notifications joined with their sender, newest first."""
    notifications, unread_count = await service.get_notifications(
        recipient_id=profile.id,
        unread_only=unread_only,
        limit=limit,
    )
    return NotificationListResponse(
        data=[_build_notification_response(n) for n in notifications],
        meta={"unread_count": unread_count},
    )


@router.get(
    "/unread-count",
    response_model=UnreadCountResponse,
    summary="Get unread notification count",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_unread_count(
    request: Request,
    profile: CurrentProfile,
    service: NotificationService = Depends(get_notification_service),
) -> UnreadCountResponse:
    count = await service.get_unread_count(profile.id)
    return UnreadCountResponse(count=count)


@router.patch(
    "/{notification_id}/read",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Mark a notification as read",
    responses={404: {"description": "Notification not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def mark_read(
    request: Request,
    notification_id: UUID,
    profile: CurrentProfile,
    service: NotificationService = Depends(get_notification_service),
) -> None:
    """Only the recipient may mark a notification read."""
    await service.mark_read(notification_id, profile.id)


@router.post(
    "/read-all",
    response_model=MarkAllReadResponse,
    summary="Mark all notifications as read",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def mark_all_read(
    request: Request,
    profile: CurrentProfile,
    service: NotificationService = Depends(get_notification_service),
) -> MarkAllReadResponse:
    count = await service.mark_all_read(profile.id)
    return MarkAllReadResponse(count=count)
