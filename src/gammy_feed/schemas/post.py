"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .common import Pagination


class PostCreate(BaseModel):
    """Schema for creating a new post.

    Blank content is rejected by the service layer, not here, so the error
    carries a readable reason instead of a validation trace.
    """

    content: str = Field("", max_length=10_000, description="Post text")
    images: list[str] = Field(default_factory=list, description="Image URIs in display order")
    tags: list[str] = Field(default_factory=list, description="Tags in display order")


class PostUpdate(PostCreate):
    """Schema for replacing the editable fields of a post."""


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    slug: str
    content: str
    images: list[str]
    tags: list[str]
    author_id: int | None
    author_name: str | None
    author_avatar: str | None = None
    views: int
    created_at: datetime
    likes_count: int = 0
    comments_count: int = 0
    # Only present for authenticated requesters.
    user_liked: bool | None = None

    model_config = ConfigDict(from_attributes=True)


class FeedPage(BaseModel):
    """One page of the post feed."""

    posts: list[PostResponse]
    pagination: Pagination


class LikeResponse(BaseModel):
    """Outcome of a like toggle."""

    liked: bool
    likes_count: int


class TagCount(BaseModel):
    tag: str
    count: int


class AuthorStats(BaseModel):
    id: int
    name: str
    avatar: str | None
    posts_count: int


class DailyCount(BaseModel):
    date: str
    count: int


class FeedOverview(BaseModel):
    """Admin dashboard totals."""

    total_posts: int
    total_views: int
    total_likes: int
    total_comments: int
    posts_per_day: list[DailyCount]
