"""Metrics façade for tool execution tracking."""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dayplanner.exec.types import ExecutorErrorKind

logger = logging.getLogger(__name__)


def record_tool_call(
    tool: str,
    latency_ms: int,
    ok: bool,
    from_cache: bool,
    retries: int,
    error_kind: "ExecutorErrorKind | None",
) -> None:
    """Record one executor call as a structured log line.

    Args:
        tool: Name of the tool that was called.
        latency_ms: Latency in milliseconds.
        ok: Whether the call succeeded.
        from_cache: Whether the result came from cache.
        retries: Number of retries performed.
        error_kind: Type of error if call failed, None if succeeded.
    """
    logger.info(
        "tool_call_metric",
        extra={
            "tool": tool,
            "latency_ms": latency_ms,
            "ok": ok,
            "from_cache": from_cache,
            "retries": retries,
            "error_kind": error_kind,
        },
    )


def record_plan_outcome(
    run_id: str,
    outcome: str,
    stops: int = 0,
    fillers: int = 0,
    unresolved: int = 0,
    latency_ms: int = 0,
) -> None:
    """Record the outcome of one planning request."""
    logger.info(
        "plan_metric",
        extra={
            "run_id": run_id,
            "outcome": outcome,
            "stops": stops,
            "fillers": fillers,
            "unresolved": unresolved,
            "latency_ms": latency_ms,
        },
    )
