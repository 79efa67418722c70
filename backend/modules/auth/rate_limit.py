"""
Sliding-window rate limiter for the authentication routes.

State is kept in process memory, keyed by client identity (IP address).
With several workers each keeps its own window.
"""

import logging
import time
from collections import defaultdict, deque
from typing import Callable, Optional

from shared.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)


class SlidingWindowRateLimiter:
    """Allows at most `max_requests` per `window_seconds` for each key."""

    def __init__(
        self,
        max_requests: int,
        window_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._requests: dict[str, deque[float]] = defaultdict(deque)

    def check(self, key: str) -> tuple[bool, Optional[int]]:
        """
        Record a request for `key` if it is allowed.

        Returns:
            (allowed, retry_after_seconds); retry_after is None when allowed
        """
        now = self._clock()
        window_start = now - self.window_seconds
        timestamps = self._requests[key]

        while timestamps and timestamps[0] <= window_start:
            timestamps.popleft()

        if len(timestamps) >= self.max_requests:
            retry_after = int(timestamps[0] + self.window_seconds - now) + 1
            return False, retry_after

        timestamps.append(now)
        return True, None

    def hit(self, key: str) -> None:
        """
        Record a request, raising when the limit is exceeded.

        Raises:
            RateLimitExceededError: With the retry-after hint in seconds
        """
        allowed, retry_after = self.check(key)
        if not allowed:
            logger.warning(f"Rate limit exceeded for {key}")
            raise RateLimitExceededError(
                retry_after=retry_after or self.window_seconds,
                max_requests=self.max_requests,
                window_seconds=self.window_seconds,
            )

    def reset(self) -> None:
        self._requests.clear()
