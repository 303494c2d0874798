"""Token bucket used to pace requests sent to Trello."""

from __future__ import annotations

import threading
import time


class RateLimiter:
    """Token bucket request pacer

    Each request consumes one token; tokens refill at ``requests_per_second``.
    With the default ``burst_allowance`` of 1 requests are spaced evenly, which
    is what a bulk run over hundreds of cards wants. Shared safely between the
    executor's worker threads.
    """

    def __init__(self, requests_per_second: float, burst_allowance: int = 1):
        """
        Args:
            requests_per_second: Sustained rate (tokens added per second)
            burst_allowance: Maximum tokens held at once
        """
        if requests_per_second <= 0:
            raise ValueError(f"requests_per_second must be positive, got {requests_per_second}")
        if burst_allowance < 1:
            raise ValueError(f"burst_allowance must be at least 1, got {burst_allowance}")

        self.rate = requests_per_second
        self.burst_allowance = burst_allowance
        self.tokens = float(burst_allowance)
        self.last_update = time.monotonic()
        self._lock = threading.Lock()

    def _refill(self) -> None:
        now = time.monotonic()
        self.tokens = min(self.burst_allowance, self.tokens + (now - self.last_update) * self.rate)
        self.last_update = now

    def acquire(self) -> None:
        """Block until one request may be sent"""
        while True:
            with self._lock:
                self._refill()
                if self.tokens >= 1.0:
                    self.tokens -= 1.0
                    return
                wait = (1.0 - self.tokens) / self.rate

            time.sleep(wait)
