"""
Caller identity resolution.

The authentication gateway in front of the service verifies the user's
token and forwards the external identity (the Firebase UID) in a header.
This module maps that identity onto a local user id.
"""
from typing import Optional

from sqlalchemy.orm import Session

from woodys.db.repositories import SqlAlchemyUserRepository


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def resolve_identity_from_headers(
    x_firebase_uid: Optional[str],
    x_auth_request_user: Optional[str],
) -> Optional[str]:
    return _clean(x_firebase_uid) or _clean(x_auth_request_user)


def resolve_caller_id(db: Session, firebase_uid: Optional[str]) -> Optional[int]:
    """Local user id for an external identity; None when no account matches."""
    if not firebase_uid:
        return None
    user = SqlAlchemyUserRepository(db).find_by_firebase_uid(firebase_uid)
    return user.id if user is not None else None


def parse_dev_user_id(raw: Optional[str]) -> Optional[int]:
    raw = _clean(raw)
    if raw is None:
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value > 0 else None
