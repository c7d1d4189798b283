"""Input normalization and format checks shared by models and services."""

import re
from typing import Iterable, List, Optional, Tuple

from woodys.errors import ValidationError

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
_USERNAME_PATTERN = re.compile(r"[A-Za-z0-9_-]+")

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100


def validate_username(username: Optional[str]) -> str:
    """Return the trimmed username or raise ``ValidationError``."""
    value = (username or "").strip()
    if not value:
        raise ValidationError("username", "username is required")
    if len(value) < USERNAME_MIN_LENGTH:
        raise ValidationError("username", f"username must be at least {USERNAME_MIN_LENGTH} characters")
    if len(value) > USERNAME_MAX_LENGTH:
        raise ValidationError("username", f"username must be at most {USERNAME_MAX_LENGTH} characters")
    if not _USERNAME_PATTERN.fullmatch(value):
        raise ValidationError(
            "username", "username may only contain letters, digits, underscores and hyphens"
        )
    return value


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def validate_email(email: Optional[str]) -> str:
    """Basic shape check: one '@', non-empty local part, dotted domain."""
    value = normalize_email(email)
    if not value:
        raise ValidationError("email", "email is required")
    if value.count("@") != 1:
        raise ValidationError("email", "invalid email format")
    local, domain = value.split("@")
    if not local or not domain or "." not in domain:
        raise ValidationError("email", "invalid email format")
    if domain.startswith(".") or domain.endswith("."):
        raise ValidationError("email", "invalid email format")
    return value


def normalize_string_set(values: Optional[Iterable[str]]) -> List[str]:
    """Collapse an iterable of strings into a sorted list of unique, non-blank entries."""
    if not values:
        return []
    if isinstance(values, str):
        values = [values]
    return sorted({str(v).strip() for v in values if v is not None and str(v).strip()})


def normalize_pagination(limit: Optional[int], offset: Optional[int]) -> Tuple[int, int]:
    """Apply the default page size and cap; reject negative values."""
    if limit is not None and limit < 0:
        raise ValidationError("limit", "limit must not be negative")
    if offset is not None and offset < 0:
        raise ValidationError("offset", "offset must not be negative")
    if not limit:
        limit = DEFAULT_PAGE_SIZE
    return min(limit, MAX_PAGE_SIZE), offset or 0
