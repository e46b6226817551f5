# src/gammy_feed/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    articles_router,
    comments_router,
    notifications_router,
    posts_router,
    settings_router,
)

__all__ = [
    "articles_router",
    "comments_router",
    "notifications_router",
    "posts_router",
    "settings_router",
]
