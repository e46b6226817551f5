# src/gammy_feed/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .articles import router as articles_router
from .comments import router as comments_router
from .notifications import router as notifications_router
from .posts import router as posts_router
from .settings import router as settings_router

__all__ = [
    "articles_router",
    "comments_router",
    "notifications_router",
    "posts_router",
    "settings_router",
]
