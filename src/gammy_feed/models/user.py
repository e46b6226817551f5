# src/gammy_feed/models/user.py
"""SQLAlchemy model for user accounts known to the identity provider."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from gammy_feed.db.session import Base
from gammy_feed.db.types import utcnow


class User(Base):
    """Account record; credentials are managed by the identity provider."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    avatar: Mapped[str | None] = mapped_column(Text, nullable=True)
    # "user" or "admin".
    role: Mapped[str] = mapped_column(Text, nullable=False, default="user")
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
