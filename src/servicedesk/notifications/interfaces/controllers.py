"""
Notifications Controllers (API Routes)
======================================

FastAPI routes for the requesting user's notification inbox.

Controllers are thin - they delegate to application services.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from servicedesk.config import settings
from servicedesk.infrastructure.database import get_session
from servicedesk.notifications.application import (
    NotificationService,
    NotificationResponse,
    NotificationListResponse,
    UnreadCountResponse,
    NotificationReadResponse,
    MarkAllReadResponse,
    MessageResponse,
)
from servicedesk.notifications.infrastructure import SQLAlchemyNotificationRepository
from servicedesk.shared.api.pagination import PageRequest, Pagination
from servicedesk.users.domain import User
from servicedesk.users.interfaces import get_current_user

router = APIRouter(prefix="/notifications", tags=["Notifications"])


# ========== Dependencies ==========

async def get_notification_service(
    session: AsyncSession = Depends(get_session)
) -> NotificationService:
    """Get notification service instance."""
    return NotificationService(SQLAlchemyNotificationRepository(session))


# ========== Route Handlers ==========

@router.get("", response_model=NotificationListResponse, summary="List my notifications")
async def list_notifications(
    page: int = Query(1, description="Page number (values below 1 become 1)"),
    limit: int = Query(settings.notifications_page_size, description="Results per page"),
    unread_only: bool = Query(False, description="Only unread notifications"),
    user: User = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service)
):
    """Newest first."""
    page_request = PageRequest.coerce(page, limit)
    items, total = await service.list_notifications(user.id, page_request, unread_only)
    return NotificationListResponse(
        notifications=[NotificationResponse.model_validate(n) for n in items],
        pagination=Pagination.build(page_request.page, page_request.limit, total)
    )


@router.get("/unread-count", response_model=UnreadCountResponse, summary="Unread count")
async def unread_count(
    user: User = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service)
):
    return UnreadCountResponse(count=await service.unread_count(user.id))


# Registered before /{notification_id}/read so "read-all" is not taken for an id.
@router.put("/read-all", response_model=MarkAllReadResponse, summary="Mark all as read")
async def mark_all_read(
    user: User = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service)
):
    count = await service.mark_all_read(user.id)
    return MarkAllReadResponse(message="All notifications marked as read", count=count)


@router.put("/{notification_id}/read", response_model=NotificationReadResponse, summary="Mark as read")
async def mark_read(
    notification_id: int,
    user: User = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service)
):
    notification = await service.mark_read(notification_id, user.id)
    return NotificationReadResponse(
        message="Notification marked as read",
        notification=NotificationResponse.model_validate(notification)
    )


@router.delete("/{notification_id}", response_model=MessageResponse, summary="Delete a notification")
async def delete_notification(
    notification_id: int,
    user: User = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service)
):
    await service.delete(notification_id, user.id)
    return MessageResponse(message="Notification deleted successfully")


# Export router for inclusion in main app
notifications_router = router
