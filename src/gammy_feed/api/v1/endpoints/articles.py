# src/gammy_feed/api/v1/endpoints/articles.py
"""Article endpoints: public reads, admin writes."""

from typing import Literal

from fastapi import APIRouter, Query, status

from gammy_feed.api.v1.dependencies import AdminUserDep, SessionDep, translate_errors
from gammy_feed.schemas.article import (
    ArticleCreate,
    ArticleOverview,
    ArticleResponse,
    ArticleUpdate,
)
from gammy_feed.schemas.common import MessageResponse
from gammy_feed.services.articles import ArticleService

router = APIRouter(prefix="/articles", tags=["articles"])


@router.get("/", response_model=list[ArticleResponse])
async def list_articles(
    db: SessionDep,
    category: str | None = Query(None, description="Only articles in this category"),
    limit: int | None = Query(None, ge=1, description="Maximum number of articles"),
    offset: int = Query(0, ge=0, description="Number of articles to skip"),
) -> list[ArticleResponse]:
    """Published articles, newest first."""
    with translate_errors("Failed to get articles"):
        return ArticleService(db).list_published(category=category, limit=limit, offset=offset)


@router.get("/admin", response_model=list[ArticleResponse])
async def list_all_articles(
    db: SessionDep,
    _admin: AdminUserDep,
    status_filter: Literal["draft", "published"] | None = Query(None, alias="status"),
    category: str | None = Query(None),
) -> list[ArticleResponse]:
    """Drafts and published articles alike, newest first."""
    with translate_errors("Failed to get articles"):
        return ArticleService(db).list_all(status=status_filter, category=category)


@router.get("/stats/overview", response_model=ArticleOverview)
async def get_article_overview(db: SessionDep, _admin: AdminUserDep) -> ArticleOverview:
    with translate_errors("Failed to get stats"):
        return ArticleService(db).overview()


@router.get("/slug/{slug}", response_model=ArticleResponse)
async def get_article(slug: str, db: SessionDep) -> ArticleResponse:
    with translate_errors("Failed to get article"):
        return ArticleService(db).get_by_slug(slug)


@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article_by_id(article_id: int, db: SessionDep) -> ArticleResponse:
    """Read an article by id without counting a view."""
    with translate_errors("Failed to get article"):
        return ArticleService(db).get_by_id(article_id)


@router.post("/", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(
    payload: ArticleCreate,
    db: SessionDep,
    admin: AdminUserDep,
) -> ArticleResponse:
    with translate_errors("Failed to create article"):
        return ArticleService(db).create(payload, admin)


@router.put("/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: int,
    payload: ArticleUpdate,
    db: SessionDep,
    _admin: AdminUserDep,
) -> ArticleResponse:
    with translate_errors("Failed to update article"):
        return ArticleService(db).update(article_id, payload)


@router.delete("/{article_id}", response_model=MessageResponse)
async def delete_article(article_id: int, db: SessionDep, _admin: AdminUserDep) -> MessageResponse:
    """Delete an article together with its comments."""
    with translate_errors("Failed to delete article"):
        ArticleService(db).delete(article_id)
    return MessageResponse(message="Article deleted")
