"""Article-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ArticleCreate(BaseModel):
    """Schema for creating an article."""

    title: str = Field(..., min_length=1, max_length=300)
    slug: str | None = Field(None, max_length=200, description="Custom slug; derived from the title when omitted")
    excerpt: str | None = None
    content: str | None = None
    image: str | None = None
    category: str | None = None
    status: Literal["draft", "published"] = "draft"


class ArticleUpdate(ArticleCreate):
    """Full replacement of an article's editable fields.

    When ``slug`` is omitted the article keeps its current slug.
    """


class ArticleResponse(BaseModel):
    """Article returned by the API."""

    id: int
    title: str
    slug: str
    excerpt: str | None
    content: str | None
    image: str | None = None
    category: str | None = None
    status: str
    views: int
    author_id: int | None
    author_name: str | None = None
    comments_count: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ArticleOverview(BaseModel):
    """Admin dashboard totals for articles."""

    total_articles: int
    total_views: int
    total_comments: int
    published: int
