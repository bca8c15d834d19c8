"""Run context for cancellation and deadline support."""

import threading
import time
from datetime import UTC, datetime

from dayplanner.errors import PlanAborted


class RunContext:
    """Context for a single planning run, supporting cancellation and a deadline."""

    def __init__(self, run_id: str, deadline_s: float | None = None) -> None:
        """Initialize run context.

        Args:
            run_id: Unique identifier for this run.
            deadline_s: Seconds from now after which the run is abandoned.
        """
        self.run_id = run_id
        self.cancelled = threading.Event()
        self.started_at = datetime.now(UTC)
        self._deadline = time.monotonic() + deadline_s if deadline_s is not None else None

    def cancel(self) -> None:
        self.cancelled.set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None when there is none."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def aborted(self) -> bool:
        return self.cancelled.is_set() or self.expired()

    def raise_if_aborted(self) -> None:
        """Raise PlanAborted when the run was cancelled or ran out of time."""
        if self.cancelled.is_set():
            raise PlanAborted("cancelled")
        if self.expired():
            raise PlanAborted("deadline")
