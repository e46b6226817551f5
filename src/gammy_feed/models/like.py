# src/gammy_feed/models/like.py
"""Models capturing likes on feed posts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gammy_feed.db.session import Base
from gammy_feed.db.types import utcnow

if TYPE_CHECKING:
    from .post import Post


class PostLike(Base):
    """One like per (post, actor).

    The actor key is ``user:<id>`` for authenticated callers and an opaque
    anonymous key otherwise. The unique constraint turns a concurrent double
    toggle into an integrity error instead of a duplicate row.
    """

    __tablename__ = "post_likes"
    __table_args__ = (
        UniqueConstraint("post_id", "actor_key", name="uq_post_likes_post_actor"),
        Index("ix_post_likes_post_id", "post_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    )
    actor_key: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    post: Mapped[Post] = relationship("Post", back_populates="likes")
