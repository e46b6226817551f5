# mypy: ignore-errors
# tests/v1/test_articles_api.py
"""Tests for article endpoints."""

from datetime import UTC, datetime, timedelta

from fastapi import status

from gammy_feed.models import Article, ArticleComment


def test_list_only_published(client, test_article, db_session) -> None:
    db_session.add(Article(title="Draft", slug="draft", status="draft"))
    db_session.commit()

    response = client.get("/api/articles/")
    assert response.status_code == status.HTTP_200_OK
    items = response.json()
    assert [a["slug"] for a in items] == ["long-read"]
    assert items[0]["author_name"] == "Alice"
    assert items[0]["comments_count"] == 0


def test_get_by_slug_counts_views(client, test_article) -> None:
    assert client.get("/api/articles/slug/long-read").json()["views"] == 1
    assert client.get("/api/articles/slug/long-read").json()["views"] == 2
    assert client.get("/api/articles/slug/nope").status_code == status.HTTP_404_NOT_FOUND


def test_create_article_as_admin(client, admin_auth_token, auth_token) -> None:
    payload = {"title": "Привет мир", "content": "...", "status": "published"}

    assert client.post("/api/articles/", json=payload, headers=auth_token).status_code == 403

    first = client.post("/api/articles/", json=payload, headers=admin_auth_token)
    assert first.status_code == status.HTTP_201_CREATED
    assert first.json()["slug"] == "privet-mir"
    assert first.json()["author_name"] == "Root"

    second = client.post("/api/articles/", json=payload, headers=admin_auth_token)
    assert second.json()["slug"] == "privet-mir-1"


def test_delete_article_cascades_comments(client, test_article, admin_auth_token, db_session) -> None:
    db_session.add(ArticleComment(article_id=test_article.id, author_name="Guest", content="hi"))
    db_session.commit()

    response = client.delete(f"/api/articles/{test_article.id}", headers=admin_auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert db_session.query(Article).count() == 0
    assert db_session.query(ArticleComment).count() == 0


def test_delete_missing_article(client, admin_auth_token) -> None:
    assert client.delete("/api/articles/404", headers=admin_auth_token).status_code == 404


def test_list_filters_by_category(client, db_session) -> None:
    db_session.add_all(
        [
            Article(title="Cats", slug="cats", category="pets", status="published"),
            Article(title="Rust", slug="rust", category="code", status="published"),
            Article(title="Dogs", slug="dogs", category="pets", status="draft"),
        ]
    )
    db_session.commit()

    response = client.get("/api/articles/", params={"category": "pets"})
    assert response.status_code == status.HTTP_200_OK
    assert [a["slug"] for a in response.json()] == ["cats"]


def test_admin_list_includes_drafts(client, test_article, db_session, admin_auth_token, auth_token) -> None:
    base = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
    test_article.created_at = base
    db_session.add(Article(title="Draft", slug="draft", status="draft", created_at=base + timedelta(hours=1)))
    db_session.commit()

    assert client.get("/api/articles/admin", headers=auth_token).status_code == 403

    response = client.get("/api/articles/admin", headers=admin_auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert [a["slug"] for a in response.json()] == ["draft", "long-read"]

    drafts = client.get("/api/articles/admin", params={"status": "draft"}, headers=admin_auth_token)
    assert [a["slug"] for a in drafts.json()] == ["draft"]


def test_get_by_id_does_not_count_views(client, test_article) -> None:
    response = client.get(f"/api/articles/{test_article.id}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["slug"] == "long-read"
    assert response.json()["author_name"] == "Alice"
    assert client.get(f"/api/articles/{test_article.id}").json()["views"] == 0
    assert client.get("/api/articles/404").status_code == status.HTTP_404_NOT_FOUND


def test_create_with_custom_slug(client, admin_auth_token) -> None:
    payload = {"title": "Anything", "slug": "My Custom Slug", "category": "news", "image": "/i.png"}
    response = client.post("/api/articles/", json=payload, headers=admin_auth_token)
    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["slug"] == "my-custom-slug"
    assert body["category"] == "news"
    assert body["image"] == "/i.png"
    assert body["status"] == "draft"


def test_update_article_as_admin(client, test_article, admin_auth_token, auth_token) -> None:
    payload = {"title": "Longer read", "content": "New body", "category": "essays", "status": "draft"}

    assert client.put(f"/api/articles/{test_article.id}", json=payload, headers=auth_token).status_code == 403

    response = client.put(f"/api/articles/{test_article.id}", json=payload, headers=admin_auth_token)
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["title"] == "Longer read"
    assert body["slug"] == "long-read"
    assert body["category"] == "essays"
    assert body["status"] == "draft"
    assert body["excerpt"] is None
    assert client.get("/api/articles/").json() == []


def test_update_reslugs_on_custom_slug(client, test_article, admin_auth_token, db_session) -> None:
    db_session.add(Article(title="Taken", slug="taken", status="published"))
    db_session.commit()
    url = f"/api/articles/{test_article.id}"

    same = client.put(url, json={"title": "Long read", "slug": "long-read"}, headers=admin_auth_token)
    assert same.json()["slug"] == "long-read"

    clash = client.put(url, json={"title": "Long read", "slug": "Taken"}, headers=admin_auth_token)
    assert clash.json()["slug"] == "taken-1"
    assert client.get("/api/articles/slug/taken-1").status_code == status.HTTP_200_OK


def test_update_missing_article(client, admin_auth_token) -> None:
    response = client.put("/api/articles/404", json={"title": "x"}, headers=admin_auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Article not found"


def test_article_overview_is_admin_only(client, test_article, db_session, auth_token, admin_auth_token) -> None:
    db_session.add(Article(title="Draft", slug="draft", status="draft", views=4))
    db_session.add(ArticleComment(article_id=test_article.id, author_name="Guest", content="hi"))
    db_session.commit()
    client.get("/api/articles/slug/long-read")

    assert client.get("/api/articles/stats/overview", headers=auth_token).status_code == 403

    response = client.get("/api/articles/stats/overview", headers=admin_auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "total_articles": 2,
        "total_views": 5,
        "total_comments": 1,
        "published": 1,
    }
