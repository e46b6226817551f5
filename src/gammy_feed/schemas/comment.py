"""Comment-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    """Schema for posting a comment.

    ``author_name``/``author_email`` are only used for guests; authenticated
    callers are named from their identity.
    """

    content: str = Field("", max_length=5000)
    author_name: str | None = Field(None, max_length=200)
    author_email: str | None = Field(None, max_length=320)


class CommentResponse(BaseModel):
    """Comment returned by the API (post and article comments share this shape)."""

    id: int
    parent_id: int
    user_id: int | None
    author_name: str
    author_email: str | None
    content: str
    created_at: datetime
    user_avatar: str | None = None

    model_config = ConfigDict(from_attributes=True)


class AdminCommentResponse(CommentResponse):
    """Comment entry in the admin moderation list."""

    type: Literal["post", "article"]
    parent_slug: str
