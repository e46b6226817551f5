"""Flat key/value settings table."""

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from gammy_feed.db.session import Base


class Setting(Base):
    """Raw settings row; values are decoded by ``SettingsStore``."""

    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(Text, primary_key=True)
    value: Mapped[str | None] = mapped_column(Text, nullable=True)
