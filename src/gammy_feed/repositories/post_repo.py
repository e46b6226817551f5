"""Data access helpers for working with posts."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import ColumnElement, Select, func, select, update
from sqlalchemy.orm import Session

from gammy_feed.models import Post, PostComment, PostLike, User

__all__ = ["PostRepository", "PostRow"]


@dataclass(frozen=True)
class PostRow:
    """A post joined with its author avatar and live counters."""

    post: Post
    author_avatar: str | None
    likes_count: int
    comments_count: int


def _likes_count():
    return (
        select(func.count(PostLike.id))
        .where(PostLike.post_id == Post.id)
        .correlate(Post)
        .scalar_subquery()
    )


def _comments_count():
    return (
        select(func.count(PostComment.id))
        .where(PostComment.post_id == Post.id)
        .correlate(Post)
        .scalar_subquery()
    )


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    @staticmethod
    def feed_filter(tag: str | None, search: str | None) -> ColumnElement[bool] | None:
        """Return the WHERE clause for a feed query; ``tag`` wins over ``search``.

        Tags are matched as a substring of the serialized tag list, search as a
        substring of the raw content.
        """
        if tag:
            return Post.tags.contains(tag, autoescape=True)
        if search:
            return Post.content.contains(search, autoescape=True)
        return None

    def _with_counts(self) -> Select[tuple[Post, str | None, int, int]]:
        return select(
            Post,
            User.avatar,
            _likes_count().label("likes_count"),
            _comments_count().label("comments_count"),
        ).outerjoin(User, Post.author_id == User.id)

    @staticmethod
    def _to_row(row: tuple[Post, str | None, int, int]) -> PostRow:
        post, avatar, likes, comments = row
        return PostRow(post, avatar, int(likes or 0), int(comments or 0))

    def list_page(
        self,
        *,
        where: ColumnElement[bool] | None,
        limit: int,
        offset: int,
    ) -> list[PostRow]:
        """Return one page of posts, newest first with id ascending on ties."""
        stmt = self._with_counts()
        if where is not None:
            stmt = stmt.where(where)
        stmt = stmt.order_by(Post.created_at.desc(), Post.id.asc()).limit(limit).offset(offset)
        return [self._to_row(row) for row in self.session.execute(stmt).all()]

    def count(self, where: ColumnElement[bool] | None = None) -> int:
        stmt = select(func.count(Post.id))
        if where is not None:
            stmt = stmt.where(where)
        return int(self.session.execute(stmt).scalar_one())

    def get_row(self, *, post_id: int | None = None, slug: str | None = None) -> PostRow | None:
        stmt = self._with_counts()
        if post_id is not None:
            stmt = stmt.where(Post.id == post_id)
        if slug is not None:
            stmt = stmt.where(Post.slug == slug)
        row = self.session.execute(stmt).first()
        return self._to_row(row) if row is not None else None

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier."""
        return self.session.get(Post, post_id)

    def slug_exists(self, slug: str) -> bool:
        return self.session.execute(
            select(Post.id).where(Post.slug == slug).limit(1)
        ).first() is not None

    def increment_views(self, post_id: int) -> None:
        """Add one view in a single UPDATE so concurrent readers never lose increments."""
        self.session.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(views=Post.views + 1)
            .execution_options(synchronize_session=False)
        )
        self.session.commit()

    def all_tag_lists(self) -> list[list[str]]:
        """Return every post's tag list in insertion order."""
        return [tags for (tags,) in self.session.execute(select(Post.tags).order_by(Post.id))]

    def top_authors(self, limit: int) -> list[tuple[int, str, str | None, int]]:
        posts_count = func.count(Post.id).label("posts_count")
        stmt = (
            select(User.id, User.name, User.avatar, posts_count)
            .join(Post, Post.author_id == User.id)
            .group_by(User.id, User.name, User.avatar)
            .order_by(posts_count.desc(), User.name.asc(), User.id.asc())
            .limit(limit)
        )
        return [tuple(row) for row in self.session.execute(stmt).all()]  # type: ignore[misc]

    def total_views(self) -> int:
        return int(self.session.execute(select(func.coalesce(func.sum(Post.views), 0))).scalar_one())

    def total_likes(self) -> int:
        return int(self.session.execute(select(func.count(PostLike.id))).scalar_one())

    def total_comments(self) -> int:
        return int(self.session.execute(select(func.count(PostComment.id))).scalar_one())

    def posts_per_day(self, since: datetime) -> list[tuple[str, int]]:
        day = func.date(Post.created_at).label("day")
        stmt = (
            select(day, func.count(Post.id))
            .where(Post.created_at >= since)
            .group_by(day)
            .order_by(day)
        )
        return [(str(date), int(count)) for date, count in self.session.execute(stmt).all()]

    def create(
        self,
        *,
        slug: str,
        content: str,
        images: list[str],
        tags: list[str],
        author_id: int | None,
        author_name: str | None,
    ) -> Post:
        """Insert a new post and return the persisted ORM instance."""
        post = Post(
            slug=slug,
            content=content,
            images=images,
            tags=tags,
            author_id=author_id,
            author_name=author_name,
            views=0,
        )
        self.session.add(post)
        self.session.commit()
        self.session.refresh(post)
        return post
