"""Custom column types and defaults."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import Text
from sqlalchemy.engine import Dialect
from sqlalchemy.types import TypeDecorator


def utcnow() -> datetime:
    """Timezone-aware default for ``created_at`` columns."""
    return datetime.now(UTC)


class JSONList(TypeDecorator[list[str]]):
    """List of strings stored as JSON text.

    Stored without ASCII escaping so substring filters (``LIKE``) match
    non-Latin tags against their literal text.
    """

    impl = Text
    cache_ok = True

    def coerce_compared_value(self, op: Any, value: Any) -> Text:
        # LIKE patterns are plain strings, not lists to serialize.
        return Text()

    def process_bind_param(self, value: list[str] | None, dialect: Dialect) -> str:
        return json.dumps(list(value or []), ensure_ascii=False)

    def process_result_value(self, value: Any, dialect: Dialect) -> list[str]:
        if not value:
            return []
        try:
            decoded = json.loads(value)
        except ValueError:
            return []
        return [str(item) for item in decoded] if isinstance(decoded, list) else []
