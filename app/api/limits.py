import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from app.config.settings import Settings


class RateLimiter:
    """In-memory fixed-window rate limiter keyed by client address.

    State is per process; counts reset when the window that started with a
    client's first request runs out.
    """

    CLEANUP_THRESHOLD = 10_000

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        # identifier -> (count, window_start)
        self._requests: dict[str, tuple[int, float]] = {}

    def is_allowed(self, identifier: str) -> bool:
        now = self._clock()
        with self._lock:
            if len(self._requests) > self.CLEANUP_THRESHOLD:
                self._cleanup(now)

            count, start = self._requests.get(identifier, (0, now))
            if now - start >= self.window_seconds:
                self._requests[identifier] = (1, now)
                return True
            if count >= self.max_requests:
                return False
            self._requests[identifier] = (count + 1, start)
            return True

    def _cleanup(self, now: float) -> None:
        expired = [
            key for key, (_, start) in self._requests.items() if now - start >= self.window_seconds
        ]
        for key in expired:
            del self._requests[key]


@dataclass(frozen=True)
class ApiLimits:
    """Request limits applied by the HTTP surface."""

    requests_per_window: int = 100
    window_seconds: int = 15 * 60
    submissions_per_window: int = 5
    submission_window_seconds: int = 10 * 60
    max_body_bytes: int = 10 * 1024 * 1024

    @classmethod
    def from_settings(cls, settings: Settings) -> "ApiLimits":
        return cls(
            requests_per_window=settings.rate_limit_requests,
            window_seconds=settings.rate_limit_window_seconds,
            submissions_per_window=settings.submit_rate_limit_requests,
            submission_window_seconds=settings.submit_rate_limit_window_seconds,
            max_body_bytes=settings.max_body_bytes,
        )
