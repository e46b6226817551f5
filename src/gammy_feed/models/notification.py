# src/gammy_feed/models/notification.py
"""Per-user notifications produced by comment and like events."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from gammy_feed.db.session import Base
from gammy_feed.db.types import utcnow


class NotificationType(enum.StrEnum):
    """Closed set of notification kinds."""

    COMMENT_POST = "comment_post"
    COMMENT_ARTICLE = "comment_article"
    LIKE_POST = "like_post"


class Notification(Base):
    """Notification owned by its target user.

    ``post_id``, ``article_id`` and ``comment_id`` are plain integers rather
    than foreign keys: the triggering content may be deleted later and the
    notification keeps its dangling reference.
    """

    __tablename__ = "notifications"
    __table_args__ = (Index("ix_notifications_user_id_is_read", "user_id", "is_read"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    type: Mapped[str] = mapped_column(Text, nullable=False)
    source_user_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    source_user_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    post_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    article_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    comment_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
