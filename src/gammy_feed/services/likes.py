# src/gammy_feed/services/likes.py
"""Like ledger: toggle semantics over (post, actor) pairs."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gammy_feed.core.errors import LikeConflict, NotFound
from gammy_feed.models import NotificationType, Post, PostLike
from gammy_feed.services.actors import ActorIdentity
from gammy_feed.services.notifications import (
    NotificationRefs,
    NotificationService,
    render_message,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LikeResult:
    liked: bool
    likes_count: int


class LikeLedger:
    """Record and query likes.

    A toggle is a check followed by a single insert or delete statement; the
    ``(post_id, actor_key)`` unique constraint rejects the insert that loses a
    concurrent race.
    """

    def __init__(self, db: Session, notifications: NotificationService | None = None) -> None:
        self.db = db
        self.notifications = notifications or NotificationService(db)

    def toggle_like(self, post_id: int, actor: ActorIdentity) -> LikeResult:
        """Like the post if the actor has not, otherwise remove the like.

        Raises:
            NotFound: If the post does not exist.
            LikeConflict: If a concurrent toggle inserted the same like first.
        """
        post = self.db.get(Post, post_id)
        if post is None:
            raise NotFound("Post not found")

        existing = self._find(post_id, actor.key)
        if existing is not None:
            self.db.delete(existing)
            self.db.commit()
            return LikeResult(liked=False, likes_count=self.count(post_id))

        self.db.add(PostLike(post_id=post_id, actor_key=actor.key, user_id=actor.user_id))
        try:
            self.db.commit()
        except IntegrityError as err:
            self.db.rollback()
            logger.warning("Duplicate like rejected for post %s by %s", post_id, actor.key)
            raise LikeConflict("Like is already being processed") from err

        self.notifications.notify(
            target_user_id=post.author_id,
            kind=NotificationType.LIKE_POST,
            source_user_id=actor.user_id,
            source_user_name=actor.name,
            refs=NotificationRefs(post_id=post_id),
            message=render_message(NotificationType.LIKE_POST, actor.name, post.content),
        )
        return LikeResult(liked=True, likes_count=self.count(post_id))

    def count(self, post_id: int) -> int:
        return (
            self.db.query(func.count(PostLike.id)).filter(PostLike.post_id == post_id).scalar()
            or 0
        )

    def has_liked(self, post_id: int, actor_key: str) -> bool:
        return self._find(post_id, actor_key) is not None

    def liked_post_ids(self, post_ids: Iterable[int], actor_key: str) -> set[int]:
        """Return the subset of ``post_ids`` the actor has liked."""
        ids = list(post_ids)
        if not ids:
            return set()
        rows = (
            self.db.query(PostLike.post_id)
            .filter(PostLike.actor_key == actor_key, PostLike.post_id.in_(ids))
            .all()
        )
        return {post_id for (post_id,) in rows}

    def _find(self, post_id: int, actor_key: str) -> PostLike | None:
        return (
            self.db.query(PostLike)
            .filter(PostLike.post_id == post_id, PostLike.actor_key == actor_key)
            .first()
        )
