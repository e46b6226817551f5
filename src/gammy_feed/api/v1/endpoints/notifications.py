# src/gammy_feed/api/v1/endpoints/notifications.py
"""Notification inbox endpoints for the signed-in user."""

from fastapi import APIRouter

from gammy_feed.api.v1.dependencies import CurrentUserDep, SessionDep, translate_errors
from gammy_feed.schemas.common import MessageResponse
from gammy_feed.schemas.notification import NotificationResponse, UnreadCount
from gammy_feed.services.notifications import NotificationService

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/", response_model=list[NotificationResponse])
async def list_notifications(
    db: SessionDep,
    current_user: CurrentUserDep,
) -> list[NotificationResponse]:
    """Latest notifications, newest first."""
    with translate_errors("Failed to get notifications"):
        rows = NotificationService(db).list_for(current_user.id)
    return [
        NotificationResponse.model_validate(notification).model_copy(
            update={"source_avatar": avatar}
        )
        for notification, avatar in rows
    ]


@router.get("/unread", response_model=UnreadCount)
async def get_unread_count(db: SessionDep, current_user: CurrentUserDep) -> UnreadCount:
    with translate_errors("Failed to get unread count"):
        return UnreadCount(count=NotificationService(db).unread_count(current_user.id))


@router.put("/read-all", response_model=MessageResponse)
async def mark_all_read(db: SessionDep, current_user: CurrentUserDep) -> MessageResponse:
    with translate_errors("Failed to mark all as read"):
        NotificationService(db).mark_all_read(current_user.id)
    return MessageResponse(message="All marked as read")


@router.put("/{notification_id}/read", response_model=MessageResponse)
async def mark_read(
    notification_id: int,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> MessageResponse:
    """Mark one notification as read; repeating the call is harmless."""
    with translate_errors("Failed to mark as read"):
        NotificationService(db).mark_read(notification_id, current_user.id)
    return MessageResponse(message="Marked as read")


@router.delete("/{notification_id}", response_model=MessageResponse)
async def delete_notification(
    notification_id: int,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> MessageResponse:
    with translate_errors("Failed to delete notification"):
        NotificationService(db).delete(notification_id, current_user.id)
    return MessageResponse(message="Notification deleted")
