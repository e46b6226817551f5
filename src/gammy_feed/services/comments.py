# src/gammy_feed/services/comments.py
"""Comments on posts and articles, with owner notifications."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from sqlalchemy.orm import Session

from gammy_feed.core.errors import NotAuthorized, NotFound, ValidationFailed
from gammy_feed.models import (
    Article,
    ArticleComment,
    NotificationType,
    Post,
    PostComment,
    User,
)
from gammy_feed.services.notifications import (
    NotificationRefs,
    NotificationService,
    render_message,
)

logger = logging.getLogger(__name__)

CommentTarget = Literal["post", "article"]
ADMIN_LIST_LIMIT = 50


@dataclass(frozen=True)
class CommentView:
    """A comment with its commenter's avatar."""

    id: int
    parent_id: int
    user_id: int | None
    author_name: str
    author_email: str | None
    content: str
    created_at: datetime
    user_avatar: str | None
    type: CommentTarget
    parent_slug: str | None = None


def _view(
    comment: PostComment | ArticleComment,
    avatar: str | None,
    target: CommentTarget,
    parent_slug: str | None = None,
) -> CommentView:
    parent_id = comment.post_id if isinstance(comment, PostComment) else comment.article_id
    return CommentView(
        id=comment.id,
        parent_id=parent_id,
        user_id=comment.user_id,
        author_name=comment.author_name,
        author_email=comment.author_email,
        content=comment.content,
        created_at=comment.created_at,
        user_avatar=avatar,
        type=target,
        parent_slug=parent_slug,
    )


class CommentService:
    """Guest-or-member comments on posts and articles.

    Both targets share one code path; ``target`` selects the tables.
    """

    def __init__(self, db: Session, notifications: NotificationService | None = None) -> None:
        self.db = db
        self.notifications = notifications or NotificationService(db)

    @staticmethod
    def _model(target: CommentTarget) -> type[PostComment] | type[ArticleComment]:
        return PostComment if target == "post" else ArticleComment

    def list_for(self, target: CommentTarget, parent_id: int) -> list[CommentView]:
        """Return comments on one post or article, newest first."""
        model = self._model(target)
        parent_column = PostComment.post_id if target == "post" else ArticleComment.article_id
        rows = (
            self.db.query(model, User.avatar)
            .outerjoin(User, model.user_id == User.id)
            .filter(parent_column == parent_id)
            .order_by(model.created_at.desc(), model.id.desc())
            .all()
        )
        return [_view(comment, avatar, target) for comment, avatar in rows]

    def add(
        self,
        target: CommentTarget,
        parent_id: int,
        *,
        user: User | None,
        content: str,
        author_name: str | None = None,
        author_email: str | None = None,
    ) -> CommentView:
        """Add a comment and notify the owner of the commented content.

        Raises:
            ValidationFailed: Blank content or no resolvable author name.
            NotFound: The post or article does not exist.
        """
        if not content or not content.strip():
            raise ValidationFailed("Content is required")
        name = user.name if user else (author_name or "").strip()
        email = user.email if user else author_email
        if not name:
            raise ValidationFailed("Name is required")

        parent = self.db.get(Post if target == "post" else Article, parent_id)
        if parent is None:
            raise NotFound("Post not found" if target == "post" else "Article not found")

        comment: PostComment | ArticleComment
        if target == "post":
            comment = PostComment(post_id=parent_id)
        else:
            comment = ArticleComment(article_id=parent_id)
        comment.user_id = user.id if user else None
        comment.author_name = name
        comment.author_email = email
        comment.content = content
        self.db.add(comment)
        self.db.commit()
        self.db.refresh(comment)

        self._notify_owner(parent, comment, user, name)
        return _view(comment, user.avatar if user else None, target)

    def delete(self, target: CommentTarget, comment_id: int, user: User) -> None:
        comment = self.db.get(self._model(target), comment_id)
        if comment is None:
            raise NotFound("Comment not found")
        if user.role != "admin" and comment.user_id != user.id:
            raise NotAuthorized("Not authorized")
        self.db.delete(comment)
        self.db.commit()
        logger.info("%s comment %s deleted by user %s", target, comment_id, user.id)

    def latest(self, limit: int = ADMIN_LIST_LIMIT) -> list[CommentView]:
        """Latest comments across posts and articles, for moderation."""
        post_rows = (
            self.db.query(PostComment, Post.slug)
            .join(Post, PostComment.post_id == Post.id)
            .order_by(PostComment.created_at.desc(), PostComment.id.desc())
            .limit(limit)
            .all()
        )
        article_rows = (
            self.db.query(ArticleComment, Article.slug)
            .join(Article, ArticleComment.article_id == Article.id)
            .order_by(ArticleComment.created_at.desc(), ArticleComment.id.desc())
            .limit(limit)
            .all()
        )
        merged = [_view(c, None, "post", slug) for c, slug in post_rows]
        merged += [_view(c, None, "article", slug) for c, slug in article_rows]
        merged.sort(key=lambda view: view.created_at, reverse=True)
        return merged[:limit]

    def _notify_owner(
        self,
        parent: Post | Article,
        comment: PostComment | ArticleComment,
        user: User | None,
        name: str,
    ) -> None:
        if isinstance(parent, Post):
            kind = NotificationType.COMMENT_POST
            refs = NotificationRefs(post_id=parent.id, comment_id=comment.id)
            subject = parent.content
        else:
            kind = NotificationType.COMMENT_ARTICLE
            refs = NotificationRefs(article_id=parent.id, comment_id=comment.id)
            subject = parent.title
        self.notifications.notify(
            target_user_id=parent.author_id,
            kind=kind,
            source_user_id=user.id if user else None,
            source_user_name=name,
            refs=refs,
            message=render_message(kind, name, subject),
        )
