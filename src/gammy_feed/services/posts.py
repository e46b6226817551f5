# src/gammy_feed/services/posts.py
"""Write-side operations on feed posts."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from gammy_feed.core.errors import (
    AuthenticationRequired,
    NotAuthorized,
    NotFound,
    ValidationFailed,
)
from gammy_feed.core.settings import settings
from gammy_feed.models import Post, User
from gammy_feed.repositories.post_repo import PostRepository
from gammy_feed.services.settings_store import FEED_ALLOW_ANONYMOUS, SettingsStore
from gammy_feed.services.slugs import post_slug

logger = logging.getLogger(__name__)


def clean_tags(tags: list[str]) -> list[str]:
    """Strip whitespace and drop empty tags, keeping order."""
    return [tag.strip() for tag in tags if tag and tag.strip()]


def can_modify(post: Post, user: User) -> bool:
    return user.role == "admin" or (post.author_id is not None and post.author_id == user.id)


class PostService:
    """Create, edit and delete posts.

    Anonymous creation is gated by the ``feedAllowAnonymous`` flag read from
    the injected settings store.
    """

    def __init__(self, db: Session, store: SettingsStore) -> None:
        self.db = db
        self.store = store
        self.posts = PostRepository(db)

    def create_post(
        self,
        *,
        author: User | None,
        content: str,
        images: list[str] | None = None,
        tags: list[str] | None = None,
    ) -> Post:
        """Create a post for ``author`` or, when allowed, for a guest.

        Raises:
            AuthenticationRequired: Anonymous caller while anonymous posting is disabled.
            ValidationFailed: Blank content.
        """
        if author is None and not self.store.get_flag(FEED_ALLOW_ANONYMOUS):
            raise AuthenticationRequired("Authentication required")
        if not content or not content.strip():
            raise ValidationFailed("Content is required")

        post = self.posts.create(
            slug=post_slug(content, self.posts.slug_exists),
            content=content,
            images=list(images or []),
            tags=clean_tags(tags or []),
            author_id=author.id if author else None,
            author_name=author.name if author else settings.guest_name,
        )
        logger.info("Post %s created (%s)", post.id, post.slug)
        return post

    def update_post(
        self,
        post_id: int,
        user: User,
        *,
        content: str,
        images: list[str] | None = None,
        tags: list[str] | None = None,
    ) -> Post:
        post = self._modifiable(post_id, user)
        if not content or not content.strip():
            raise ValidationFailed("Content is required")
        post.content = content
        post.images = list(images or [])
        post.tags = clean_tags(tags or [])
        self.db.commit()
        self.db.refresh(post)
        return post

    def delete_post(self, post_id: int, user: User) -> None:
        """Delete a post together with its comments and likes."""
        post = self._modifiable(post_id, user)
        self.db.delete(post)
        self.db.commit()
        logger.info("Post %s deleted by user %s", post_id, user.id)

    def _modifiable(self, post_id: int, user: User) -> Post:
        post = self.posts.get_by_id(post_id)
        if post is None:
            raise NotFound("Post not found")
        if not can_modify(post, user):
            raise NotAuthorized("Not authorized")
        return post
