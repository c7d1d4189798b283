"""
In-process request rate limiting.

A fixed-window counter per caller key. It is advisory only: each worker
process keeps its own counters.
"""
import threading
import time
from typing import Callable, Dict, Optional, Tuple

from woodys.utils.runtime import env_int

DEFAULT_MAX_REQUESTS = 120
DEFAULT_WINDOW_SECONDS = 60
_PRUNE_THRESHOLD = 10_000


class RequestRateLimiter:
    def __init__(
        self,
        max_requests: int,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_requests <= 0:
            raise ValueError("max_requests must be positive")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = float(window_seconds)
        self._clock = clock
        self._lock = threading.Lock()
        self._windows: Dict[str, Tuple[float, int]] = {}

    @classmethod
    def from_env(cls) -> Optional["RequestRateLimiter"]:
        """Build from RATE_LIMIT_REQUESTS / RATE_LIMIT_WINDOW_SECONDS; 0 requests disables."""
        max_requests = env_int("RATE_LIMIT_REQUESTS", DEFAULT_MAX_REQUESTS)
        if max_requests <= 0:
            return None
        window = env_int("RATE_LIMIT_WINDOW_SECONDS", DEFAULT_WINDOW_SECONDS)
        return cls(max_requests, window if window > 0 else DEFAULT_WINDOW_SECONDS)

    def hit(self, key: str) -> Tuple[bool, float]:
        """Count one request for ``key``; returns (allowed, seconds until the window resets)."""
        with self._lock:
            now = self._clock()
            if len(self._windows) > _PRUNE_THRESHOLD:
                self._prune(now)
            started, count = self._windows.get(key, (now, 0))
            if now - started >= self.window_seconds:
                started, count = now, 0
            if count >= self.max_requests:
                return False, self.window_seconds - (now - started)
            self._windows[key] = (started, count + 1)
            return True, 0.0

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()

    def _prune(self, now: float) -> None:
        expired = [k for k, (started, _) in self._windows.items() if now - started >= self.window_seconds]
        for key in expired:
            del self._windows[key]
