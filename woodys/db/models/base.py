"""
Shared SQLAlchemy base and helpers.
"""
from datetime import datetime, UTC

from sqlalchemy.orm import declarative_base

from woodys.errors import ValidationError


def now_utc():
    """Return an aware UTC datetime for default/updated timestamps."""
    return datetime.now(UTC)


Base = declarative_base()


def require_positive_id(value, field: str) -> None:
    if value is None or value <= 0:
        raise ValidationError(field, f"{field} is required")
