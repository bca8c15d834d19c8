"""Tool executor with timeout, retry, circuit breaker, and cache support."""

import logging
import random
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Any, Protocol

from dayplanner.config import Settings
from dayplanner.errors import (
    ExternalProviderFailure,
    PermanentProviderError,
    TransientProviderError,
)
from dayplanner.exec.breaker import CircuitBreaker
from dayplanner.exec.cache import SimpleCache, compute_cache_key
from dayplanner.exec.context import RunContext
from dayplanner.exec.types import (
    ExecutorErrorKind,
    ToolCallable,
    ToolName,
    ToolRequest,
    ToolResponse,
)
from dayplanner.metrics.core import record_tool_call

logger = logging.getLogger(__name__)

# Initial attempt + one retry
MAX_ATTEMPTS = 2


class ToolRegistry(Protocol):
    """Protocol for tool registry."""

    def get_tool(self, name: ToolName) -> ToolCallable: ...

    def __contains__(self, name: object) -> bool: ...


class DictToolRegistry:
    """Registry backed by a plain name -> callable mapping."""

    def __init__(self, tools: dict[str, ToolCallable] | None = None) -> None:
        self._tools: dict[str, ToolCallable] = dict(tools or {})

    def register(self, name: ToolName, tool: ToolCallable) -> None:
        self._tools[name] = tool

    def get_tool(self, name: ToolName) -> ToolCallable:
        try:
            return self._tools[name]
        except KeyError:
            raise KeyError(f"No tool registered under {name!r}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._tools


class ToolExecutor:
    """Run tool calls under per-call timeouts, one jittered retry, breakers and a cache.

    Only timeouts and ``TransientProviderError`` are retried. A
    ``PermanentProviderError`` fails the call at once. Failures never raise;
    callers inspect ``ToolResponse.ok`` and degrade.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        settings: Settings,
        cache: SimpleCache | None = None,
        rng: random.Random | None = None,
        max_workers: int = 8,
    ) -> None:
        """Initialize tool executor.

        Args:
            registry: Tool registry.
            settings: Application settings.
            cache: Optional cache for tool results.
            rng: Optional random number generator for jitter (for testing).
            max_workers: Threads available for in-flight tool calls.
        """
        self.registry = registry
        self.settings = settings
        self.cache = cache
        self.rng = rng or random.Random()
        self._breakers: dict[str, CircuitBreaker] = {}
        self._breakers_lock = threading.Lock()
        self._pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="tool")

    def breaker(self, name: ToolName) -> CircuitBreaker:
        with self._breakers_lock:
            if name not in self._breakers:
                self._breakers[name] = CircuitBreaker(
                    name=name,
                    failure_threshold=self.settings.breaker_failure_threshold,
                    window_s=self.settings.breaker_timeout_s,
                    cooldown_s=self.settings.breaker_timeout_s,
                )
            return self._breakers[name]

    def shutdown(self) -> None:
        self._pool.shutdown(wait=False, cancel_futures=True)

    def _call_with_timeout(
        self, tool: ToolCallable, args: dict[str, Any], timeout_s: float
    ) -> dict[str, Any]:
        future = self._pool.submit(tool, args)
        try:
            return future.result(timeout=timeout_s)
        except FuturesTimeoutError:
            future.cancel()
            raise

    def _respond(
        self,
        request: ToolRequest,
        started: float,
        *,
        data: dict[str, Any] | None = None,
        error: str | None = None,
        error_kind: ExecutorErrorKind | None = None,
        from_cache: bool = False,
        retries: int = 0,
        breaker_open: bool = False,
    ) -> ToolResponse:
        latency_ms = int((time.monotonic() - started) * 1000)
        ok = data is not None
        record_tool_call(
            tool=request.name,
            latency_ms=latency_ms,
            ok=ok,
            from_cache=from_cache,
            retries=retries,
            error_kind=error_kind,
        )
        return ToolResponse(
            ok=ok,
            data=data,
            error=None if ok else error,
            error_kind=None if ok else error_kind,
            from_cache=from_cache,
            latency_ms=latency_ms,
            retries=retries,
            breaker_open=breaker_open,
        )

    def execute(self, request: ToolRequest, ctx: RunContext) -> ToolResponse:
        """Execute a tool request with all policies applied."""
        started = time.monotonic()

        if ctx.aborted():
            return self._respond(request, started, error="cancelled", error_kind="cancelled")

        breaker = self.breaker(request.name)
        if not breaker.allow():
            return self._respond(
                request, started, error="circuit_open", error_kind="breaker_open", breaker_open=True
            )

        cache_key = None
        if self.cache is not None and request.cache_ttl_s:
            cache_key = compute_cache_key(request)
            cached = self.cache.get(cache_key)
            if cached is not None:
                return self._respond(request, started, data=cached, from_cache=True)

        tool = self.registry.get_tool(request.name)
        soft_s = (
            request.timeout_soft_ms / 1000.0
            if request.timeout_soft_ms
            else self.settings.soft_timeout_s
        )
        hard_s = (
            request.timeout_hard_ms / 1000.0
            if request.timeout_hard_ms
            else self.settings.hard_timeout_s
        )
        remaining = ctx.remaining()
        if remaining is not None:
            hard_s = min(hard_s, remaining)

        data: dict[str, Any] | None = None
        error: str | None = None
        error_kind: ExecutorErrorKind | None = None
        retries = 0

        for attempt in range(MAX_ATTEMPTS):
            if attempt > 0:
                jitter_ms = self.rng.randint(
                    self.settings.retry_jitter_min_ms, self.settings.retry_jitter_max_ms
                )
                # Wakes early on cancellation
                if ctx.cancelled.wait(jitter_ms / 1000.0) or ctx.aborted():
                    error, error_kind = "cancelled", "cancelled"
                    break

            left = hard_s - (time.monotonic() - started)
            if left <= 0:
                error, error_kind = "hard_timeout", "timeout_hard"
                break

            retries = attempt
            try:
                data = self._call_with_timeout(tool, request.args, min(soft_s, left))
            except FuturesTimeoutError:
                elapsed = time.monotonic() - started
                error = "timeout"
                error_kind = "timeout_hard" if elapsed >= hard_s else "timeout_soft"
            except TransientProviderError as exc:
                error, error_kind = str(exc), "tool_error"
            except PermanentProviderError as exc:
                error, error_kind = str(exc), "permanent_error"
                break
            except Exception as exc:
                logger.exception(f"Unexpected failure in tool {request.name}")
                error, error_kind = str(exc), "permanent_error"
                break
            else:
                error, error_kind = None, None
                break

        if data is None:
            if error_kind != "cancelled":
                breaker.record_failure()
            logger.warning(
                f"Tool {request.name} failed after {retries + 1} attempt(s)",
                extra={"run_id": ctx.run_id, "error_kind": error_kind},
            )
            return self._respond(
                request, started, error=error, error_kind=error_kind, retries=retries
            )

        breaker.record_success()
        if cache_key is not None and request.cache_ttl_s:
            self.cache.set(cache_key, data, request.cache_ttl_s)
        return self._respond(request, started, data=data, retries=retries)

    def execute_or_raise(self, request: ToolRequest, ctx: RunContext) -> dict[str, Any]:
        """Execute and return the data, raising on failure.

        Raises:
            PlanAborted: The run was cancelled or hit its deadline.
            ExternalProviderFailure: The tool failed after retries.
        """
        response = self.execute(request, ctx)
        if response.ok:
            assert response.data is not None
            return response.data
        if response.error_kind == "cancelled":
            ctx.raise_if_aborted()
        raise ExternalProviderFailure(request.name, response.error or "")
