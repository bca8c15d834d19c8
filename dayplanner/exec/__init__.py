"""Tool execution module with timeouts, retries, circuit breaking, and caching."""

from dayplanner.exec.breaker import CircuitBreaker
from dayplanner.exec.cache import InMemoryCache, SimpleCache, compute_cache_key
from dayplanner.exec.context import RunContext
from dayplanner.exec.executor import DictToolRegistry, ToolExecutor, ToolRegistry
from dayplanner.exec.types import (
    ExecutorErrorKind,
    ToolCallable,
    ToolName,
    ToolRequest,
    ToolResponse,
)

__all__ = [
    "CircuitBreaker",
    "DictToolRegistry",
    "ExecutorErrorKind",
    "InMemoryCache",
    "RunContext",
    "SimpleCache",
    "ToolCallable",
    "ToolExecutor",
    "ToolName",
    "ToolRegistry",
    "ToolRequest",
    "ToolResponse",
    "compute_cache_key",
]
