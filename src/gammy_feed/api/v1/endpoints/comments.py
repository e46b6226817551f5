# src/gammy_feed/api/v1/endpoints/comments.py
"""Comment endpoints shared by posts and articles."""

from typing import Literal

from fastapi import APIRouter, status

from gammy_feed.api.v1.dependencies import (
    AdminUserDep,
    CurrentUserDep,
    OptionalUserDep,
    SessionDep,
    translate_errors,
)
from gammy_feed.schemas.comment import AdminCommentResponse, CommentCreate, CommentResponse
from gammy_feed.schemas.common import MessageResponse
from gammy_feed.services.comments import CommentService

router = APIRouter(prefix="/comments", tags=["comments"])

Target = Literal["post", "article"]


@router.get("/all", response_model=list[AdminCommentResponse])
async def list_latest_comments(db: SessionDep, _admin: AdminUserDep) -> list[AdminCommentResponse]:
    """Latest comments across posts and articles (admin only)."""
    with translate_errors("Failed to get comments"):
        views = CommentService(db).latest()
    return [AdminCommentResponse.model_validate(view) for view in views]


@router.get("/{target}/{parent_id}", response_model=list[CommentResponse])
async def list_comments(target: Target, parent_id: int, db: SessionDep) -> list[CommentResponse]:
    """Comments on a post or article, newest first."""
    with translate_errors("Failed to get comments"):
        views = CommentService(db).list_for(target, parent_id)
    return [CommentResponse.model_validate(view) for view in views]


@router.post(
    "/{target}/{parent_id}",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    target: Target,
    parent_id: int,
    payload: CommentCreate,
    db: SessionDep,
    user: OptionalUserDep,
) -> CommentResponse:
    """Comment as the signed-in user, or as a guest giving a name."""
    with translate_errors("Failed to add comment"):
        view = CommentService(db).add(
            target,
            parent_id,
            user=user,
            content=payload.content,
            author_name=payload.author_name,
            author_email=payload.author_email,
        )
    return CommentResponse.model_validate(view)


@router.delete("/{target}/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    target: Target,
    comment_id: int,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> MessageResponse:
    """Delete a comment (its author or an admin)."""
    with translate_errors("Failed to delete comment"):
        CommentService(db).delete(target, comment_id, current_user)
    return MessageResponse(message="Comment deleted")
