"""
Sliding Window Rate Limiter

Counts accepted requests per ``prefix:key`` inside a trailing time window
(sliding window log). Several limiters can share one store; the prefix keeps
each purpose's counters apart, so the same caller is tracked independently
for login and OTP traffic.

Exhaustion is a normal outcome reported through ``RateLimitResult.success``,
never an exception.
"""

import math
import time
from abc import ABC, abstractmethod
from typing import Callable, ContextManager, List

from pydantic import BaseModel


def wall_clock_ms() -> float:
    return time.time() * 1000


class RateLimitResult(BaseModel):
    """Outcome of a single rate limit check"""

    success: bool
    remaining: int
    reset_in: int  # whole seconds, rounded up


class RateLimitStore(ABC):
    """
    Storage for rate limit windows - application layer.

    A window is the ordered list of accepted timestamps (ms) for one
    fully-qualified key, together with the interval of the limiter owning it.
    """

    @abstractmethod
    def transaction(self) -> ContextManager:
        """Context manager making a get/set sequence atomic"""
        pass

    @abstractmethod
    def get_window(self, key: str) -> List[float]:
        """Timestamps recorded for key, oldest first (empty if unknown)"""
        pass

    @abstractmethod
    def set_window(self, key: str, timestamps: List[float], interval_ms: int) -> None:
        """Replace the window for key. An empty list removes the key."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Drop the window for key"""
        pass

    @abstractmethod
    def sweep(self, now_ms: float) -> int:
        """Prune every window and remove empty keys. Returns keys removed."""
        pass


class RateLimiter:
    """
    Sliding window log limiter.

    Business Rules:
    - At most max_requests accepted per key within any interval_ms window
    - Rejected requests are not recorded
    - reset_in on rejection is the time until the oldest accepted request
      leaves the window, rounded up to the next second
    """

    def __init__(
        self,
        store: RateLimitStore,
        interval_ms: int = 60 * 1000,
        max_requests: int = 10,
        prefix: str = "",
        clock: Callable[[], float] = wall_clock_ms,
    ):
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        self.store = store
        self.interval_ms = interval_ms
        self.max_requests = max_requests
        self.prefix = prefix
        self.clock = clock

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    def check(self, key: str) -> RateLimitResult:
        """Record a request for key if the window has room for it"""
        rate_limit_key = self._key(key)
        now = self.clock()

        with self.store.transaction():
            recent = [
                t for t in self.store.get_window(rate_limit_key) if now - t < self.interval_ms
            ]

            if len(recent) >= self.max_requests:
                self.store.set_window(rate_limit_key, recent, self.interval_ms)
                reset_in = math.ceil((recent[0] + self.interval_ms - now) / 1000)
                return RateLimitResult(success=False, remaining=0, reset_in=reset_in)

            recent.append(now)
            self.store.set_window(rate_limit_key, recent, self.interval_ms)

        return RateLimitResult(
            success=True,
            remaining=self.max_requests - len(recent),
            reset_in=math.ceil(self.interval_ms / 1000),
        )

    def reset(self, key: str) -> None:
        """Clear the window for key (administrative override)"""
        self.store.delete(self._key(key))
