# mypy: ignore-errors
# tests/v1/test_likes_api.py
"""Tests for the like toggle endpoint."""

from fastapi import status

from gammy_feed.api.v1.dependencies import get_anonymous_key_resolver_dep
from gammy_feed.models import Notification, PostLike
from gammy_feed.services.actors import client_token_key


def test_toggle_like_authenticated(client, test_post, other_user, other_auth_token, db_session) -> None:
    url = f"/api/posts/{test_post.id}/like"

    first = client.post(url, headers=other_auth_token)
    assert first.status_code == status.HTTP_200_OK
    assert first.json() == {"liked": True, "likes_count": 1}

    like = db_session.query(PostLike).one()
    assert like.actor_key == f"user:{other_user.id}"
    assert like.user_id == other_user.id

    second = client.post(url, headers=other_auth_token)
    assert second.json() == {"liked": False, "likes_count": 0}
    assert db_session.query(PostLike).count() == 0


def test_anonymous_likes_are_keyed_by_address(client, test_post, db_session) -> None:
    response = client.post(f"/api/posts/{test_post.id}/like")
    assert response.json() == {"liked": True, "likes_count": 1}
    assert db_session.query(PostLike).one().actor_key == "addr:testclient"

    # Same address, same actor: the second call removes the like.
    assert client.post(f"/api/posts/{test_post.id}/like").json()["liked"] is False


def test_anonymous_like_notifies_as_guest(client, test_post, test_user, db_session) -> None:
    client.post(f"/api/posts/{test_post.id}/like")

    notification = db_session.query(Notification).one()
    assert notification.user_id == test_user.id
    assert notification.source_user_id is None
    assert notification.source_user_name == "Guest"


def test_client_token_resolver(client, app, test_post, db_session) -> None:
    app.dependency_overrides[get_anonymous_key_resolver_dep] = lambda: client_token_key
    try:
        url = f"/api/posts/{test_post.id}/like"
        client.post(url, headers={"X-Client-Token": "device-a"})
        result = client.post(url, headers={"X-Client-Token": "device-b"})
        assert result.json() == {"liked": True, "likes_count": 2}

        # Without the header the address is used.
        client.post(url)
    finally:
        app.dependency_overrides.pop(get_anonymous_key_resolver_dep, None)

    keys = {like.actor_key for like in db_session.query(PostLike).all()}
    assert keys == {"token:device-a", "token:device-b", "addr:testclient"}


def test_like_missing_post(client, auth_token) -> None:
    response = client.post("/api/posts/31337/like", headers=auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_self_like_creates_no_notification(client, test_post, auth_token, db_session) -> None:
    assert client.post(f"/api/posts/{test_post.id}/like", headers=auth_token).json()["liked"]
    assert db_session.query(Notification).count() == 0
