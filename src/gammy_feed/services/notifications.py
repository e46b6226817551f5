# src/gammy_feed/services/notifications.py
"""Notification fan-out and inbox queries.

Notifications are a best-effort side effect of comments and likes: the
triggering action is already committed when ``notify`` runs, and a failure to
record the notification is logged and swallowed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import func, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gammy_feed.core.errors import NotAuthorized, NotFound
from gammy_feed.core.settings import settings
from gammy_feed.models import Notification, NotificationType, User

logger = logging.getLogger(__name__)

_TEMPLATES: dict[NotificationType, str] = {
    NotificationType.COMMENT_POST: '{actor} commented on your post: "{preview}"',
    NotificationType.COMMENT_ARTICLE: '{actor} commented on your article "{preview}"',
    NotificationType.LIKE_POST: '{actor} liked your post: "{preview}"',
}


@dataclass(frozen=True)
class NotificationRefs:
    """Weak references to the content that triggered a notification."""

    post_id: int | None = None
    article_id: int | None = None
    comment_id: int | None = None


def preview(text: str, length: int | None = None) -> str:
    """Return ``text`` cut to ``length`` characters, with an ellipsis when cut."""
    length = length if length is not None else settings.notification_preview_length
    return text[:length] + ("..." if len(text) > length else "")


def render_message(kind: NotificationType, actor_name: str, subject: str) -> str:
    """Render the fixed template for ``kind``.

    Post notifications embed a truncated preview of the post; article
    notifications embed the article title as-is.
    """
    shown = subject if kind is NotificationType.COMMENT_ARTICLE else preview(subject)
    return _TEMPLATES[kind].format(actor=actor_name, preview=shown)


class NotificationService:
    """Create and manage notifications for one database session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def notify(
        self,
        *,
        target_user_id: int | None,
        kind: NotificationType,
        source_user_id: int | None,
        source_user_name: str | None,
        refs: NotificationRefs,
        message: str,
    ) -> Notification | None:
        """Record a notification unless there is no owner or the actor is the owner.

        Returns:
            The persisted notification, or None when nothing was recorded.
        """
        if target_user_id is None:
            return None
        if source_user_id is not None and source_user_id == target_user_id:
            return None

        notification = Notification(
            user_id=target_user_id,
            type=kind.value,
            source_user_id=source_user_id,
            source_user_name=source_user_name,
            post_id=refs.post_id,
            article_id=refs.article_id,
            comment_id=refs.comment_id,
            message=message,
            is_read=False,
        )
        try:
            self.db.add(notification)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(
                "Failed to record %s notification for user %s", kind.value, target_user_id
            )
            return None
        logger.debug("Notified user %s (%s)", target_user_id, kind.value)
        return notification

    def list_for(
        self, user_id: int, limit: int | None = None
    ) -> list[tuple[Notification, str | None]]:
        """Return ``(notification, source_avatar)`` pairs, newest first."""
        limit = limit if limit is not None else settings.notifications_list_limit
        rows = (
            self.db.query(Notification, User.avatar)
            .outerjoin(User, Notification.source_user_id == User.id)
            .filter(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(limit)
            .all()
        )
        return [(notification, avatar) for notification, avatar in rows]

    def unread_count(self, user_id: int) -> int:
        return (
            self.db.query(func.count(Notification.id))
            .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
            .scalar()
            or 0
        )

    def mark_read(self, notification_id: int, user_id: int) -> Notification:
        notification = self._owned(notification_id, user_id)
        if not notification.is_read:
            notification.is_read = True
            self.db.commit()
        return notification

    def mark_all_read(self, user_id: int) -> int:
        """Mark every unread notification of ``user_id`` as read; return how many changed."""
        result = self.db.execute(
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
            .values(is_read=True)
            .execution_options(synchronize_session="fetch")
        )
        self.db.commit()
        return result.rowcount or 0

    def delete(self, notification_id: int, user_id: int) -> None:
        notification = self._owned(notification_id, user_id)
        self.db.delete(notification)
        self.db.commit()

    def _owned(self, notification_id: int, user_id: int) -> Notification:
        notification = self.db.get(Notification, notification_id)
        if notification is None:
            raise NotFound("Notification not found")
        if notification.user_id != user_id:
            raise NotAuthorized("Not authorized")
        return notification
