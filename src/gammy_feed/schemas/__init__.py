"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .article import ArticleCreate, ArticleResponse
from .comment import AdminCommentResponse, CommentCreate, CommentResponse
from .common import MessageResponse, Pagination
from .notification import NotificationResponse, UnreadCount
from .post import (
    AuthorStats,
    FeedOverview,
    FeedPage,
    LikeResponse,
    PostCreate,
    PostResponse,
    PostUpdate,
    TagCount,
)
from .setting import BulkSettingsResponse, SettingResponse, SettingUpdate

__all__ = [
    "ArticleCreate", "ArticleResponse",
    "AdminCommentResponse", "CommentCreate", "CommentResponse",
    "MessageResponse", "Pagination",
    "NotificationResponse", "UnreadCount",
    "AuthorStats", "FeedOverview", "FeedPage", "LikeResponse",
    "PostCreate", "PostResponse", "PostUpdate", "TagCount",
    "BulkSettingsResponse", "SettingResponse", "SettingUpdate",
]
