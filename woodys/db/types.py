"""Custom SQLAlchemy types used by the persistence layer."""
from __future__ import annotations

import json
from typing import List

from sqlalchemy.dialects import postgresql
from sqlalchemy.types import JSON, TypeDecorator

from woodys.utils.validation import normalize_string_set


class StringSet(TypeDecorator[List[str]]):
    """Store an unordered set of strings as a sorted JSON array.

    Uses JSONB on PostgreSQL so membership can be tested with ``@>``; plain
    JSON elsewhere (e.g. SQLite during unit tests).
    """

    cache_ok = True
    impl = JSON

    def load_dialect_impl(self, dialect):  # type: ignore[override]
        if dialect.name == "postgresql":
            return dialect.type_descriptor(postgresql.JSONB())
        return dialect.type_descriptor(JSON())

    def process_bind_param(self, value, dialect):  # type: ignore[override]
        if value is None:
            return []
        return normalize_string_set(value)

    def process_result_value(self, value, dialect):  # type: ignore[override]
        if value is None:
            return []
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except json.JSONDecodeError:
                return [value]
        return normalize_string_set(value)

    def copy(self, **kwargs):  # type: ignore[override]
        return StringSet()


class StringList(TypeDecorator[List[str]]):
    """Ordered list of strings stored as JSON (JSONB on PostgreSQL)."""

    cache_ok = True
    impl = JSON

    def load_dialect_impl(self, dialect):  # type: ignore[override]
        if dialect.name == "postgresql":
            return dialect.type_descriptor(postgresql.JSONB())
        return dialect.type_descriptor(JSON())

    def process_bind_param(self, value, dialect):  # type: ignore[override]
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return [str(v) for v in value]

    def process_result_value(self, value, dialect):  # type: ignore[override]
        if value is None:
            return []
        if isinstance(value, str):
            value = json.loads(value)
        return list(value)

    def copy(self, **kwargs):  # type: ignore[override]
        return StringList()
