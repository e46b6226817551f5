# tests/services/test_feed_aggregator.py
"""Tests for feed listing, view counting and rankings."""

import math

import pytest

from gammy_feed.core.errors import NotFound, ValidationFailed
from gammy_feed.models import PostComment, PostLike
from gammy_feed.services.feed import FeedAggregator, FeedQuery, rank_tags


def test_rank_tags_counts_every_occurrence() -> None:
    ranked = rank_tags([["a", "a", "b"], ["a"]], limit=15)
    assert [(t.tag, t.count) for t in ranked] == [("a", 3), ("b", 1)]


def test_rank_tags_breaks_ties_by_name() -> None:
    ranked = rank_tags([["zeta", "alpha"], ["mid"]], limit=2)
    assert [t.tag for t in ranked] == ["alpha", "mid"]


def test_feed_query_rejects_bad_paging() -> None:
    with pytest.raises(ValidationFailed):
        FeedQuery(page=0)
    with pytest.raises(ValidationFailed):
        FeedQuery(limit=0)
    assert FeedQuery(page=3, limit=10).offset == 20


@pytest.mark.parametrize(("total", "limit"), [(7, 3), (6, 3), (1, 10)])
def test_pages_cover_every_post_once_newest_first(db_session, make_post, total, limit) -> None:
    posts = [make_post(f"post number {i}") for i in range(total)]
    aggregator = FeedAggregator(db_session)

    first = aggregator.list_posts(FeedQuery(page=1, limit=limit))
    assert first.pagination.total == total
    assert first.pagination.pages == math.ceil(total / limit)

    seen = []
    for page in range(1, first.pagination.pages + 1):
        seen.extend(aggregator.list_posts(FeedQuery(page=page, limit=limit)).posts)

    assert sorted(p.id for p in seen) == sorted(p.id for p in posts)
    assert len({p.id for p in seen}) == total
    created = [p.created_at for p in seen]
    assert created == sorted(created, reverse=True)


def test_same_timestamp_orders_by_id(db_session, make_post) -> None:
    first = make_post("first")
    second = make_post("second", created_at=first.created_at)
    third = make_post("third", created_at=first.created_at)

    ids = [p.id for p in FeedAggregator(db_session).list_posts(FeedQuery()).posts]
    assert ids == [first.id, second.id, third.id]


def test_tag_filter_wins_over_search(db_session, make_post) -> None:
    make_post("about cats", tags=["pets"])
    make_post("about python", tags=["code"])

    page = FeedAggregator(db_session).list_posts(FeedQuery(tag="code", search="cats"))
    assert [p.content for p in page.posts] == ["about python"]
    assert page.pagination.total == 1

    page = FeedAggregator(db_session).list_posts(FeedQuery(search="cats"))
    assert [p.content for p in page.posts] == ["about cats"]


def test_filters_treat_wildcards_literally(db_session, make_post) -> None:
    make_post("100% sure")
    make_post("1000 reasons")

    page = FeedAggregator(db_session).list_posts(FeedQuery(search="100%"))
    assert [p.content for p in page.posts] == ["100% sure"]


def test_tag_filter_matches_non_latin_tags(db_session, make_post) -> None:
    make_post("привет", tags=["новости"])
    page = FeedAggregator(db_session).list_posts(FeedQuery(tag="новости"))
    assert page.pagination.total == 1


def test_live_counts_and_like_state(db_session, test_post, other_user) -> None:
    db_session.add(PostLike(post_id=test_post.id, actor_key="user:77", user_id=None))
    db_session.add(PostComment(post_id=test_post.id, author_name="Guest", content="nice"))
    db_session.commit()

    aggregator = FeedAggregator(db_session)
    anonymous = aggregator.list_posts(FeedQuery()).posts[0]
    assert (anonymous.likes_count, anonymous.comments_count) == (1, 1)
    assert anonymous.user_liked is None

    assert aggregator.list_posts(FeedQuery(), "user:77").posts[0].user_liked is True
    assert aggregator.get_by_id(test_post.id, f"user:{other_user.id}").user_liked is False


def test_get_by_slug_counts_each_view(db_session, test_post, test_user, other_user) -> None:
    aggregator = FeedAggregator(db_session)
    requesters = [
        None,
        f"user:{test_user.id}",
        f"user:{other_user.id}",
        "addr:10.0.0.7",
        f"user:{test_user.id}",
        None,
    ]
    for expected, requester in enumerate(requesters, start=1):
        assert aggregator.get_by_slug(test_post.slug, requester).views == expected

    assert aggregator.get_by_id(test_post.id).views == len(requesters)

    with pytest.raises(NotFound):
        aggregator.get_by_slug("nope")


def test_top_authors(db_session, make_post, test_user, other_user, admin_user) -> None:
    for _ in range(2):
        make_post("by alice", author=test_user)
        make_post("by bob", author=other_user)
    make_post("by root", author=admin_user)
    make_post("by guest")

    authors = FeedAggregator(db_session).top_authors(limit=2)
    assert [(a.name, a.posts_count) for a in authors] == [("Alice", 2), ("Bob", 2)]


def test_overview_totals(db_session, test_post, make_post) -> None:
    make_post("old one", views=5)
    db_session.add(PostLike(post_id=test_post.id, actor_key="addr:1", user_id=None))
    db_session.commit()

    overview = FeedAggregator(db_session).overview()
    assert overview.total_posts == 2
    assert overview.total_views == 5
    assert overview.total_likes == 1
    assert overview.total_comments == 0
