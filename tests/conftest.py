# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import datetime, timedelta
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from gammy_feed.core.security import ROLE_ADMIN, create_access_token
from gammy_feed.db.session import Base
from gammy_feed.db.session import get_db as app_get_session
from gammy_feed.main import app as fastapi_app
from gammy_feed.models import Article, Post, User
from gammy_feed.services.settings_store import FEED_ALLOW_ANONYMOUS, SettingsStore

TEST_DB_URL = "sqlite://"

_SLUG_COUNTER = count(1)
_BASE_TIME = datetime(2026, 1, 1, 12, 0, 0)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    # Services commit and roll back on their own, so each test gets a plain
    # session and the tables are emptied afterwards.
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _make_user(db: Session, name: str, email: str, role: str = "user", avatar: str | None = None) -> User:
    user = User(name=name, email=email, role=role, avatar=avatar)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def _headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Create and return the primary persisted user."""
    return _make_user(db_session, "Alice", "alice@example.com", avatar="https://img/alice.png")


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Create and return a second persisted user."""
    return _make_user(db_session, "Bob", "bob@example.com", avatar="https://img/bob.png")


@pytest.fixture()
def admin_user(db_session: Session) -> User:
    return _make_user(db_session, "Root", "root@example.com", role=ROLE_ADMIN)


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return _headers(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return _headers(other_user)


@pytest.fixture()
def admin_auth_token(admin_user: User) -> dict[str, str]:
    return _headers(admin_user)


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory inserting posts with strictly increasing creation times."""
    offsets = count(0)

    def _make(
        content: str = "Test post content",
        *,
        author: User | None = None,
        tags: list[str] | None = None,
        images: list[str] | None = None,
        created_at: datetime | None = None,
        views: int = 0,
    ) -> Post:
        post = Post(
            slug=f"test-post-{next(_SLUG_COUNTER)}",
            content=content,
            tags=list(tags or []),
            images=list(images or []),
            author_id=author.id if author else None,
            author_name=author.name if author else "Guest",
            views=views,
            created_at=created_at or _BASE_TIME + timedelta(minutes=next(offsets)),
        )
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make


@pytest.fixture()
def test_post(make_post: Callable[..., Post], test_user: User) -> Post:
    """Create a baseline post owned by the primary user."""
    return make_post("Test post content", author=test_user, tags=["news"])


@pytest.fixture()
def test_article(db_session: Session, test_user: User) -> Article:
    article = Article(
        title="Long read",
        slug="long-read",
        excerpt="Short summary",
        content="Body of the article",
        status="published",
        author_id=test_user.id,
    )
    db_session.add(article)
    db_session.commit()
    db_session.refresh(article)
    return article


@pytest.fixture()
def allow_anonymous(db_session: Session) -> Any:
    """Turn on anonymous posting through the settings store."""
    return SettingsStore(db_session).set(FEED_ALLOW_ANONYMOUS, True)
