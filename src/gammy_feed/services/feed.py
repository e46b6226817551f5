# src/gammy_feed/services/feed.py
"""Feed aggregation: paginated listings, single-post reads and rankings.

The aggregator is stateless per request. Like and comment counts are
computed live from the ledger tables on every read.
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy.orm import Session

from gammy_feed.core.errors import NotFound, ValidationFailed
from gammy_feed.core.settings import settings
from gammy_feed.db.types import utcnow
from gammy_feed.repositories.post_repo import PostRepository, PostRow
from gammy_feed.schemas.common import Pagination
from gammy_feed.schemas.post import (
    AuthorStats,
    DailyCount,
    FeedOverview,
    FeedPage,
    PostResponse,
    TagCount,
)
from gammy_feed.services.likes import LikeLedger

OVERVIEW_DAYS = 7


@dataclass(frozen=True)
class FeedQuery:
    """Parameters of one feed listing."""

    page: int = 1
    limit: int = 10
    tag: str | None = None
    search: str | None = None

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValidationFailed("page must be at least 1")
        if self.limit < 1:
            raise ValidationFailed("limit must be at least 1")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def to_response(row: PostRow, user_liked: bool | None = None) -> PostResponse:
    post = row.post
    return PostResponse(
        id=post.id,
        slug=post.slug,
        content=post.content,
        images=list(post.images or []),
        tags=list(post.tags or []),
        author_id=post.author_id,
        author_name=post.author_name,
        author_avatar=row.author_avatar,
        views=post.views,
        created_at=post.created_at,
        likes_count=row.likes_count,
        comments_count=row.comments_count,
        user_liked=user_liked,
    )


def rank_tags(tag_lists: list[list[str]], limit: int) -> list[TagCount]:
    """Count every tag occurrence; highest count first, then tag name."""
    counts: Counter[str] = Counter()
    for tags in tag_lists:
        counts.update(tags)
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [TagCount(tag=tag, count=count) for tag, count in ranked[:limit]]


class FeedAggregator:
    """Read-side view over posts, likes and comments."""

    def __init__(self, db: Session, likes: LikeLedger | None = None) -> None:
        self.db = db
        self.posts = PostRepository(db)
        self.likes = likes or LikeLedger(db)

    def list_posts(self, query: FeedQuery, actor_key: str | None = None) -> FeedPage:
        """Return one page of the feed.

        Args:
            query: Page, page size and optional tag/search filter.
            actor_key: When given, each post carries ``user_liked``.
        """
        where = PostRepository.feed_filter(query.tag, query.search)
        total = self.posts.count(where)
        rows = self.posts.list_page(where=where, limit=query.limit, offset=query.offset)

        liked: set[int] = set()
        if actor_key is not None:
            liked = self.likes.liked_post_ids((row.post.id for row in rows), actor_key)

        return FeedPage(
            posts=[
                to_response(row, row.post.id in liked if actor_key is not None else None)
                for row in rows
            ],
            pagination=Pagination(
                page=query.page,
                limit=query.limit,
                total=total,
                pages=math.ceil(total / query.limit),
            ),
        )

    def get_by_slug(self, slug: str, actor_key: str | None = None) -> PostResponse:
        """Return a post by slug and count one view for it."""
        row = self.posts.get_row(slug=slug)
        if row is None:
            raise NotFound("Post not found")
        self.posts.increment_views(row.post.id)
        self.db.refresh(row.post)
        return self._with_like_state(row, actor_key)

    def get_by_id(self, post_id: int, actor_key: str | None = None) -> PostResponse:
        row = self.posts.get_row(post_id=post_id)
        if row is None:
            raise NotFound("Post not found")
        return self._with_like_state(row, actor_key)

    def top_tags(self, limit: int | None = None) -> list[TagCount]:
        limit = limit if limit is not None else settings.top_tags_limit
        return rank_tags(self.posts.all_tag_lists(), limit)

    def top_authors(self, limit: int | None = None) -> list[AuthorStats]:
        limit = limit if limit is not None else settings.top_authors_limit
        return [
            AuthorStats(id=user_id, name=name, avatar=avatar, posts_count=count)
            for user_id, name, avatar, count in self.posts.top_authors(limit)
        ]

    def overview(self) -> FeedOverview:
        since = utcnow() - timedelta(days=OVERVIEW_DAYS)
        return FeedOverview(
            total_posts=self.posts.count(),
            total_views=self.posts.total_views(),
            total_likes=self.posts.total_likes(),
            total_comments=self.posts.total_comments(),
            posts_per_day=[
                DailyCount(date=day, count=count) for day, count in self.posts.posts_per_day(since)
            ],
        )

    def _with_like_state(self, row: PostRow, actor_key: str | None) -> PostResponse:
        if actor_key is None:
            return to_response(row)
        return to_response(row, self.likes.has_liked(row.post.id, actor_key))
