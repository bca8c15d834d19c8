"""Type definitions for tool execution."""

from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, Field

ToolName = Literal["extractor", "places", "directions", "weather"]

ExecutorErrorKind = Literal[
    "timeout_soft",
    "timeout_hard",
    "tool_error",
    "permanent_error",
    "breaker_open",
    "cancelled",
]

# Tools take a JSON-able args dict and return a JSON-able result dict
ToolCallable = Callable[[dict[str, Any]], dict[str, Any]]


class ToolRequest(BaseModel):
    """A single call to an external tool."""

    name: ToolName
    args: dict[str, Any] = Field(default_factory=dict)
    timeout_soft_ms: int | None = Field(default=None, description="Overrides soft_timeout_s")
    timeout_hard_ms: int | None = Field(default=None, description="Overrides hard_timeout_s")
    cache_ttl_s: int | None = Field(default=None, description="Cache successes for this long")


class ToolResponse(BaseModel):
    """Outcome of a tool call after timeouts, retries and caching."""

    ok: bool
    data: dict[str, Any] | None = None
    error: str | None = None
    error_kind: ExecutorErrorKind | None = None
    from_cache: bool = False
    latency_ms: int
    retries: int = 0
    breaker_open: bool = False
