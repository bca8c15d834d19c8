"""Per-tool circuit breaker."""

import logging
import threading
import time
from collections import deque
from collections.abc import Callable
from typing import Literal

logger = logging.getLogger(__name__)

BreakerState = Literal["closed", "open", "half_open"]


class CircuitBreaker:
    """Opens after ``failure_threshold`` failures within ``window_s``.

    An open breaker rejects calls for ``cooldown_s``, then lets a single
    trial call through (half-open). A successful trial closes it again; a
    failed trial re-opens it.
    """

    def __init__(
        self,
        name: str,
        failure_threshold: int,
        window_s: float,
        cooldown_s: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.name = name
        self.failure_threshold = failure_threshold
        self.window_s = window_s
        self.cooldown_s = cooldown_s
        self._clock = clock
        self._failures: deque[float] = deque()
        self._opened_at: float | None = None
        self._state: BreakerState = "closed"
        self._lock = threading.Lock()

    @property
    def state(self) -> BreakerState:
        return self._state

    def allow(self) -> bool:
        """Whether a call may proceed right now."""
        with self._lock:
            if self._state == "open":
                assert self._opened_at is not None
                if self._clock() - self._opened_at < self.cooldown_s:
                    return False
                self._state = "half_open"
            return True

    def record_failure(self) -> None:
        with self._lock:
            now = self._clock()
            self._failures.append(now)
            while self._failures and self._failures[0] < now - self.window_s:
                self._failures.popleft()
            if self._state == "half_open" or (
                self._state == "closed" and len(self._failures) >= self.failure_threshold
            ):
                self._state = "open"
                self._opened_at = now
                logger.warning(f"Circuit breaker opened for {self.name}")

    def record_success(self) -> None:
        with self._lock:
            if self._state == "half_open":
                logger.info(f"Circuit breaker closed for {self.name}")
            self._state = "closed"
            self._failures.clear()
            self._opened_at = None
