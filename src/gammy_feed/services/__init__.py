# src/gammy_feed/services/__init__.py
"""Business logic services for the Gammy Feed application."""

from .articles import ArticleService
from .comments import CommentService
from .feed import FeedAggregator, FeedQuery
from .likes import LikeLedger, LikeResult
from .notifications import NotificationService
from .posts import PostService
from .settings_store import SettingsStore

__all__ = [
    "ArticleService",
    "CommentService",
    "FeedAggregator", "FeedQuery",
    "LikeLedger", "LikeResult",
    "NotificationService",
    "PostService",
    "SettingsStore",
]
