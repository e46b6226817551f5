"""Article reads and admin writes."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import Select, func, select, update
from sqlalchemy.orm import Session

from gammy_feed.core.errors import NotFound
from gammy_feed.db.types import utcnow
from gammy_feed.models import Article, ArticleComment, User
from gammy_feed.models.article import ARTICLE_STATUS_PUBLISHED
from gammy_feed.schemas.article import (
    ArticleCreate,
    ArticleOverview,
    ArticleResponse,
    ArticleUpdate,
)
from gammy_feed.services.slugs import article_slug

logger = logging.getLogger(__name__)


class ArticleService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def _query(self) -> Select[Any]:
        comments_count = (
            select(func.count(ArticleComment.id))
            .where(ArticleComment.article_id == Article.id)
            .correlate(Article)
            .scalar_subquery()
        )
        return select(Article, User.name, comments_count).outerjoin(
            User, Article.author_id == User.id
        )

    @staticmethod
    def _response(article: Article, author_name: str | None, comments: int) -> ArticleResponse:
        response = ArticleResponse.model_validate(article)
        return response.model_copy(
            update={"author_name": author_name, "comments_count": int(comments or 0)}
        )

    def _slug_taken(self, slug: str, exclude_id: int | None = None) -> bool:
        stmt = select(Article.id).where(Article.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(Article.id != exclude_id)
        return self.db.execute(stmt.limit(1)).first() is not None

    def _listing(
        self,
        *,
        status: str | None,
        category: str | None,
        limit: int | None,
        offset: int,
    ) -> list[ArticleResponse]:
        stmt = self._query()
        if status is not None:
            stmt = stmt.where(Article.status == status)
        if category is not None:
            stmt = stmt.where(Article.category == category)
        stmt = stmt.order_by(Article.created_at.desc(), Article.id.desc()).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return [self._response(*row) for row in self.db.execute(stmt).all()]

    def list_published(
        self,
        category: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[ArticleResponse]:
        """Published articles, newest first, optionally within one category."""
        return self._listing(
            status=ARTICLE_STATUS_PUBLISHED, category=category, limit=limit, offset=offset
        )

    def list_all(
        self,
        status: str | None = None,
        category: str | None = None,
    ) -> list[ArticleResponse]:
        """Every article regardless of status, for the admin panel."""
        return self._listing(status=status, category=category, limit=None, offset=0)

    def get_by_id(self, article_id: int) -> ArticleResponse:
        row = self.db.execute(self._query().where(Article.id == article_id)).first()
        if row is None:
            raise NotFound("Article not found")
        return self._response(*row)

    def get_by_slug(self, slug: str) -> ArticleResponse:
        """Return an article and count one view for it."""
        row = self.db.execute(self._query().where(Article.slug == slug)).first()
        if row is None:
            raise NotFound("Article not found")
        article = row[0]
        # Reading is not an edit: keep updated_at as it was.
        self.db.execute(
            update(Article)
            .where(Article.id == article.id)
            .values(views=Article.views + 1, updated_at=Article.updated_at)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        self.db.refresh(article)
        return self._response(article, row[1], row[2])

    def create(self, data: ArticleCreate, author: User) -> ArticleResponse:
        article = Article(
            title=data.title,
            slug=article_slug(data.title, self._slug_taken, custom=data.slug),
            excerpt=data.excerpt,
            content=data.content,
            image=data.image,
            category=data.category,
            status=data.status,
            author_id=author.id,
        )
        self.db.add(article)
        self.db.commit()
        self.db.refresh(article)
        logger.info("Article %s created (%s)", article.id, article.slug)
        return self._response(article, author.name, 0)

    def update(self, article_id: int, data: ArticleUpdate) -> ArticleResponse:
        """Replace an article's editable fields.

        A custom slug is normalized and made unique among the other
        articles; without one the current slug is kept.
        """
        article = self.db.get(Article, article_id)
        if article is None:
            raise NotFound("Article not found")

        if data.slug and data.slug.strip():
            article.slug = article_slug(
                data.title,
                lambda slug: self._slug_taken(slug, exclude_id=article_id),
                custom=data.slug,
            )
        article.title = data.title
        article.excerpt = data.excerpt
        article.content = data.content
        article.image = data.image
        article.category = data.category
        article.status = data.status
        article.updated_at = utcnow()
        self.db.commit()
        logger.info("Article %s updated (%s)", article.id, article.slug)
        return self.get_by_id(article_id)

    def delete(self, article_id: int) -> None:
        article = self.db.get(Article, article_id)
        if article is None:
            raise NotFound("Article not found")
        self.db.delete(article)
        self.db.commit()

    def overview(self) -> ArticleOverview:
        total_views = self.db.scalar(select(func.coalesce(func.sum(Article.views), 0)))
        published = self.db.scalar(
            select(func.count(Article.id)).where(Article.status == ARTICLE_STATUS_PUBLISHED)
        )
        return ArticleOverview(
            total_articles=self.db.scalar(select(func.count(Article.id))) or 0,
            total_views=int(total_views or 0),
            total_comments=self.db.scalar(select(func.count(ArticleComment.id))) or 0,
            published=published or 0,
        )
