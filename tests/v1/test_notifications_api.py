# mypy: ignore-errors
# tests/v1/test_notifications_api.py
"""Tests for the notification inbox endpoints."""

import pytest
from fastapi import status

from gammy_feed.models import Notification, NotificationType
from gammy_feed.services.notifications import NotificationRefs, NotificationService


@pytest.fixture()
def notification(db_session, test_user, other_user) -> Notification:
    return NotificationService(db_session).notify(
        target_user_id=test_user.id,
        kind=NotificationType.COMMENT_POST,
        source_user_id=other_user.id,
        source_user_name=other_user.name,
        refs=NotificationRefs(post_id=1, comment_id=2),
        message='Bob commented on your post: "hi"',
    )


def test_requires_authentication(client) -> None:
    response = client.get("/api/notifications/")
    assert response.status_code in {status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN}


def test_list_and_unread(client, notification, auth_token, other_auth_token) -> None:
    response = client.get("/api/notifications/", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    items = response.json()
    assert len(items) == 1
    assert items[0]["type"] == "comment_post"
    assert items[0]["source_avatar"] == "https://img/bob.png"
    assert items[0]["is_read"] is False
    assert (items[0]["post_id"], items[0]["comment_id"], items[0]["article_id"]) == (1, 2, None)

    assert client.get("/api/notifications/unread", headers=auth_token).json() == {"count": 1}
    assert client.get("/api/notifications/", headers=other_auth_token).json() == []


def test_mark_read_is_idempotent(client, notification, auth_token) -> None:
    url = f"/api/notifications/{notification.id}/read"
    assert client.put(url, headers=auth_token).status_code == status.HTTP_200_OK
    assert client.put(url, headers=auth_token).status_code == status.HTTP_200_OK
    assert client.get("/api/notifications/unread", headers=auth_token).json() == {"count": 0}


def test_mark_all_read(client, notification, auth_token) -> None:
    response = client.put("/api/notifications/read-all", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert client.get("/api/notifications/unread", headers=auth_token).json() == {"count": 0}


def test_other_user_cannot_touch_notification(
    client, notification, other_auth_token, db_session
) -> None:
    read = client.put(f"/api/notifications/{notification.id}/read", headers=other_auth_token)
    assert read.status_code == status.HTTP_403_FORBIDDEN

    delete = client.delete(f"/api/notifications/{notification.id}", headers=other_auth_token)
    assert delete.status_code == status.HTTP_403_FORBIDDEN

    db_session.expire_all()
    row = db_session.get(Notification, notification.id)
    assert row is not None
    assert row.is_read is False


def test_delete_notification(client, notification, auth_token, db_session) -> None:
    url = f"/api/notifications/{notification.id}"
    response = client.delete(url, headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert db_session.query(Notification).count() == 0

    again = client.delete(url, headers=auth_token)
    assert again.status_code == status.HTTP_404_NOT_FOUND
