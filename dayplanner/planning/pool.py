"""Bounded fan-out that honors run cancellation and deadlines."""

from collections.abc import Callable, Sequence
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import TypeVar

from dayplanner.exec.context import RunContext

T = TypeVar("T")
R = TypeVar("R")

POLL_INTERVAL_S = 0.05


def run_pooled(
    fn: Callable[[T], R],
    items: Sequence[T],
    ctx: RunContext,
    max_workers: int,
) -> list[R]:
    """Apply ``fn`` to every item with at most ``max_workers`` in flight.

    Results keep input order. Raises PlanAborted (after cancelling queued
    work) as soon as the run is cancelled or overdue; the first exception
    raised by ``fn`` propagates.
    """
    if not items:
        return []
    ctx.raise_if_aborted()
    pool = ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(items))))
    futures: list[Future[R]] = [pool.submit(fn, item) for item in items]
    try:
        pending = set(futures)
        while pending:
            done, pending = wait(pending, timeout=POLL_INTERVAL_S, return_when=FIRST_EXCEPTION)
            for future in done:
                error = future.exception()
                if error is not None:
                    raise error
            ctx.raise_if_aborted()
        return [future.result() for future in futures]
    finally:
        # Queued work is dropped; calls already running finish in the background
        pool.shutdown(wait=False, cancel_futures=True)
