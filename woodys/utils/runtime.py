"""Runtime environment helpers: env parsing and the development-mode guard."""

import logging
import os
from typing import FrozenSet, List, Optional
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

_LOCAL_HOSTS: FrozenSet[str] = frozenset({"localhost", "127.0.0.1", "::1"})


def env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("invalid_env_int name=%s value=%r default=%s", name, raw, default)
        return default


def env_list(name: str) -> List[str]:
    """Comma-separated env var as a list of non-empty, stripped entries."""
    return [entry.strip() for entry in os.getenv(name, "").split(",") if entry.strip()]


def _hostname(url_value: str) -> Optional[str]:
    url_value = (url_value or "").strip()
    if not url_value:
        return None
    candidate = url_value if "://" in url_value else f"http://{url_value}"
    return urlparse(candidate).hostname


def dev_mode_active() -> bool:
    """Return True if DEV_MODE is on and allowed here; raise if misconfigured.

    Dev mode lets callers name themselves with ``X-User-Id``, so it is only
    honoured when APP_BASE_URL points at a local (or DEV_MODE_ALLOWED_HOSTS)
    host, or when ALLOW_DEV_MODE=true is set explicitly.
    """
    if not env_flag("DEV_MODE"):
        return False

    hostname = _hostname(os.getenv("APP_BASE_URL", ""))
    allowed = set(_LOCAL_HOSTS) | {host.lower() for host in env_list("DEV_MODE_ALLOWED_HOSTS")}

    if hostname:
        if hostname.lower() not in allowed:
            raise RuntimeError(
                "DEV_MODE=true is not permitted when APP_BASE_URL points to "
                f"'{hostname}'. Allowed hosts: {sorted(allowed)}"
            )
    elif not env_flag("ALLOW_DEV_MODE"):
        raise RuntimeError(
            "DEV_MODE=true requires APP_BASE_URL to be set to a localhost URL "
            "or ALLOW_DEV_MODE=true for non-local execution."
        )
    return True
