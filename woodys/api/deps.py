"""
API dependency helpers.

Provides the request-scoped service bundle and the resolved caller id.
"""
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from woodys.api.auth import parse_dev_user_id, resolve_caller_id, resolve_identity_from_headers
from woodys.db.database import get_db
from woodys.services import Services, build_services
from woodys.utils.runtime import dev_mode_active


def get_services(db: Session = Depends(get_db)) -> Services:
    return build_services(db)


def get_optional_caller_id(
    db: Session = Depends(get_db),
    x_firebase_uid: Optional[str] = Header(default=None),
    x_auth_request_user: Optional[str] = Header(default=None),
    x_user_id: Optional[str] = Header(default=None),
) -> Optional[int]:
    """Caller's user id, or None for anonymous requests."""
    if x_user_id is not None and dev_mode_active():
        dev_user_id = parse_dev_user_id(x_user_id)
        if dev_user_id is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid X-User-Id header")
        return dev_user_id
    identity = resolve_identity_from_headers(x_firebase_uid, x_auth_request_user)
    return resolve_caller_id(db, identity)


def get_caller_id(caller_id: Optional[int] = Depends(get_optional_caller_id)) -> int:
    if caller_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return caller_id
