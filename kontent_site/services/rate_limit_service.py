"""In-memory sliding-window limiter for draft-secret guesses. State is lost on restart."""

from __future__ import annotations

import time
from collections import deque


class InMemoryRateLimiter:
    """Count failures per key inside a sliding time window.

    Safe under asyncio's single-threaded model: no method awaits between
    reading and mutating the window. Not for use from several OS threads.
    """

    def __init__(self) -> None:
        self._failures: dict[str, deque[float]] = {}

    def _window(self, key: str, window_seconds: int, now: float) -> deque[float] | None:
        failures = self._failures.get(key)
        if failures is None:
            return None
        cutoff = now - window_seconds
        while failures and failures[0] < cutoff:
            failures.popleft()
        if not failures:
            del self._failures[key]
            return None
        return failures

    def retry_after(self, key: str, limit: int, window_seconds: int) -> int:
        """Return seconds until the key may try again, or 0 when it is not limited."""
        now = time.monotonic()
        failures = self._window(key, window_seconds, now)
        if failures is None or len(failures) < limit:
            return 0
        return max(int(failures[0] + window_seconds - now) + 1, 1)

    def record_failure(self, key: str, window_seconds: int) -> None:
        now = time.monotonic()
        failures = self._window(key, window_seconds, now)
        if failures is None:
            failures = self._failures[key] = deque()
        failures.append(now)

    def clear(self, key: str) -> None:
        self._failures.pop(key, None)
