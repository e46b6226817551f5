"""Notification-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class NotificationResponse(BaseModel):
    """Notification as shown to its owner."""

    id: int
    user_id: int
    type: str
    source_user_id: int | None
    source_user_name: str | None
    source_avatar: str | None = None
    post_id: int | None
    article_id: int | None
    comment_id: int | None
    message: str | None
    is_read: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UnreadCount(BaseModel):
    count: int
