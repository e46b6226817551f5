# src/gammy_feed/models/__init__.py
"""SQLAlchemy models for the Gammy Feed application."""

from .article import Article, ArticleComment
from .like import PostLike
from .notification import Notification, NotificationType
from .post import Post, PostComment
from .setting import Setting
from .user import User

__all__ = [
    "Article", "ArticleComment",
    "Notification", "NotificationType",
    "Post", "PostComment",
    "PostLike",
    "Setting",
    "User",
]
