"""Key/value settings store backed by the ``settings`` table.

Values are kept as text in a single column. At the access boundary they are
resolved into a tagged variant: ``JsonValue`` when the text parses as JSON,
``StringValue`` otherwise. Writers store strings verbatim and serialize
everything else as JSON.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from gammy_feed.core.errors import ValidationFailed
from gammy_feed.core.settings import settings
from gammy_feed.models import Setting

logger = logging.getLogger(__name__)

FEED_ALLOW_ANONYMOUS = "feedAllowAnonymous"


@dataclass(frozen=True)
class StringValue:
    value: str

    def to_python(self) -> Any:
        return self.value


@dataclass(frozen=True)
class JsonValue:
    value: Any

    def to_python(self) -> Any:
        return self.value


SettingValue = StringValue | JsonValue


def decode_value(raw: str) -> SettingValue:
    """Resolve stored text into its tagged form."""
    try:
        return JsonValue(json.loads(raw))
    except ValueError:
        return StringValue(raw)


def encode_value(value: Any) -> str:
    """Serialize a Python value for storage."""
    if isinstance(value, StringValue):
        return value.value
    if isinstance(value, JsonValue):
        value = value.value
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


class SettingsStore:
    """Read/write access to the settings table for one session."""

    def __init__(self, db: Session, *, max_value_length: int | None = None) -> None:
        self.db = db
        self.max_value_length = (
            max_value_length if max_value_length is not None else settings.settings_value_max_length
        )

    def get(self, key: str) -> SettingValue | None:
        row = self.db.get(Setting, key)
        if row is None or row.value is None:
            return None
        return decode_value(row.value)

    def get_all(self) -> dict[str, SettingValue]:
        rows = self.db.query(Setting).order_by(Setting.key).all()
        return {row.key: decode_value(row.value) for row in rows if row.value is not None}

    def get_flag(self, key: str) -> bool:
        """Return True for JSON ``true``/``1`` or the strings ``"true"``/``"1"``."""
        stored = self.get(key)
        if stored is None:
            return False
        value = stored.to_python()
        if isinstance(value, bool):
            return value
        if isinstance(value, int | float):
            return value == 1
        return isinstance(value, str) and value.strip().lower() in {"true", "1"}

    def set(self, key: str, value: Any) -> SettingValue:
        encoded = self._validated(key, value)
        self._upsert(key, encoded)
        self.db.commit()
        logger.info("Setting %s updated", key)
        return decode_value(encoded)

    def set_many(self, values: Mapping[str, Any]) -> dict[str, SettingValue]:
        """Write every entry or none of them."""
        if not values:
            raise ValidationFailed("Settings object cannot be empty")
        encoded = {key: self._validated(key, value) for key, value in values.items()}
        try:
            for key, text in encoded.items():
                self._upsert(key, text)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("Settings updated: %s", ", ".join(sorted(encoded)))
        return {key: decode_value(text) for key, text in encoded.items()}

    def _validated(self, key: str, value: Any) -> str:
        if not isinstance(key, str) or not key.strip():
            raise ValidationFailed("Key is required and must be a non-empty string")
        encoded = encode_value(value)
        if len(encoded) > self.max_value_length:
            raise ValidationFailed(
                f'Value for key "{key}" is too long. '
                f"Maximum {self.max_value_length} characters allowed"
            )
        return encoded

    def _upsert(self, key: str, text: str) -> None:
        row = self.db.get(Setting, key)
        if row is None:
            self.db.add(Setting(key=key, value=text))
        else:
            row.value = text
