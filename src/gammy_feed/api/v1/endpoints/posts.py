# src/gammy_feed/api/v1/endpoints/posts.py
"""Post-related endpoints: feed, CRUD, likes and rankings."""

from fastapi import APIRouter, Query, status

from gammy_feed.api.v1.dependencies import (
    ActorDep,
    AdminUserDep,
    CurrentUserDep,
    OptionalUserDep,
    SessionDep,
    SettingsStoreDep,
    translate_errors,
)
from gammy_feed.core.settings import settings
from gammy_feed.models import User
from gammy_feed.repositories.post_repo import PostRow
from gammy_feed.schemas.common import MessageResponse
from gammy_feed.schemas.post import (
    AuthorStats,
    FeedOverview,
    FeedPage,
    LikeResponse,
    PostCreate,
    PostResponse,
    PostUpdate,
    TagCount,
)
from gammy_feed.services.actors import user_actor_key
from gammy_feed.services.feed import FeedAggregator, FeedQuery, to_response
from gammy_feed.services.likes import LikeLedger
from gammy_feed.services.posts import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


def _requester_key(user: User | None) -> str | None:
    # Like state is reported to signed-in readers only.
    return user_actor_key(user.id) if user is not None else None


@router.get("/", response_model=FeedPage)
async def list_posts(
    db: SessionDep,
    user: OptionalUserDep,
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(
        settings.feed_page_size,
        ge=1,
        description="Posts per page, capped at FEED_MAX_PAGE_SIZE",
    ),
    tag: str | None = Query(None, description="Only posts whose tags contain this text"),
    search: str | None = Query(None, description="Only posts whose content contains this text"),
) -> FeedPage:
    """List posts newest first; ``tag`` takes precedence over ``search``."""
    with translate_errors("Failed to get posts"):
        return FeedAggregator(db).list_posts(
            FeedQuery(
                page=page,
                limit=min(limit, settings.feed_max_page_size),
                tag=tag,
                search=search,
            ),
            _requester_key(user),
        )


@router.get("/stats/tags", response_model=list[TagCount])
async def get_top_tags(db: SessionDep) -> list[TagCount]:
    """Most used tags across all posts."""
    with translate_errors("Failed to get tags"):
        return FeedAggregator(db).top_tags()


@router.get("/stats/authors", response_model=list[AuthorStats])
async def get_top_authors(db: SessionDep) -> list[AuthorStats]:
    """Users with the most posts."""
    with translate_errors("Failed to get authors"):
        return FeedAggregator(db).top_authors()


@router.get("/stats/overview", response_model=FeedOverview)
async def get_overview(db: SessionDep, _admin: AdminUserDep) -> FeedOverview:
    """Feed totals and posts per day over the last week (admin only)."""
    with translate_errors("Failed to get stats"):
        return FeedAggregator(db).overview()


@router.get("/slug/{slug}", response_model=PostResponse)
async def get_post_by_slug(slug: str, db: SessionDep, user: OptionalUserDep) -> PostResponse:
    """Get a post by slug; every call counts one view."""
    with translate_errors("Failed to get post"):
        return FeedAggregator(db).get_by_slug(slug, _requester_key(user))


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, db: SessionDep, user: OptionalUserDep) -> PostResponse:
    """Get a post by id without counting a view."""
    with translate_errors("Failed to get post"):
        return FeedAggregator(db).get_by_id(post_id, _requester_key(user))


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    db: SessionDep,
    user: OptionalUserDep,
    store: SettingsStoreDep,
) -> PostResponse:
    """Create a post; guests may post only when ``feedAllowAnonymous`` is on."""
    with translate_errors("Failed to create post"):
        post = PostService(db, store).create_post(
            author=user,
            content=post_data.content,
            images=post_data.images,
            tags=post_data.tags,
        )
        return to_response(PostRow(post, user.avatar if user else None, 0, 0))


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: int,
    post_data: PostUpdate,
    db: SessionDep,
    current_user: CurrentUserDep,
    store: SettingsStoreDep,
) -> PostResponse:
    """Replace a post's content, images and tags (author or admin)."""
    with translate_errors("Failed to update post"):
        PostService(db, store).update_post(
            post_id,
            current_user,
            content=post_data.content,
            images=post_data.images,
            tags=post_data.tags,
        )
        return FeedAggregator(db).get_by_id(post_id, _requester_key(current_user))


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: int,
    db: SessionDep,
    current_user: CurrentUserDep,
    store: SettingsStoreDep,
) -> MessageResponse:
    """Delete a post with its comments and likes (author or admin)."""
    with translate_errors("Failed to delete post"):
        PostService(db, store).delete_post(post_id, current_user)
    return MessageResponse(message="Post deleted")


@router.post("/{post_id}/like", response_model=LikeResponse)
async def toggle_like(post_id: int, db: SessionDep, actor: ActorDep) -> LikeResponse:
    """Like the post, or remove the caller's like if it already exists."""
    with translate_errors("Failed to like post"):
        result = LikeLedger(db).toggle_like(post_id, actor)
    return LikeResponse(liked=result.liked, likes_count=result.likes_count)
