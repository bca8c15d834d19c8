"""TTL cache for tool results."""

import hashlib
import json
import threading
import time
from collections.abc import Callable
from typing import Any, Protocol

from dayplanner.exec.types import ToolRequest


class SimpleCache(Protocol):
    """Simple cache interface for tool results."""

    def get(self, key: str) -> dict[str, Any] | None: ...

    def set(self, key: str, value: dict[str, Any], ttl_seconds: int) -> None: ...


class InMemoryCache:
    """Thread-safe in-process cache; entries expire after their TTL.

    Expired entries are swept on every write. When ``max_entries`` is
    reached the entry closest to expiry is evicted.
    """

    def __init__(
        self, clock: Callable[[], float] = time.monotonic, max_entries: int = 10_000
    ) -> None:
        self._store: dict[str, tuple[dict[str, Any], float]] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self._max_entries = max_entries

    def get(self, key: str) -> dict[str, Any] | None:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                del self._store[key]
                return None
            return value

    def set(self, key: str, value: dict[str, Any], ttl_seconds: int) -> None:
        with self._lock:
            now = self._clock()
            expired = [k for k, (_, expires_at) in self._store.items() if now >= expires_at]
            for k in expired:
                del self._store[k]
            if key not in self._store and len(self._store) >= self._max_entries:
                oldest = min(self._store, key=lambda k: self._store[k][1])
                del self._store[oldest]
            self._store[key] = (value, now + ttl_seconds)

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)


def compute_cache_key(request: ToolRequest) -> str:
    """SHA-256 of the tool name and args as canonical JSON."""
    payload = json.dumps(
        {"name": request.name, "args": request.args},
        sort_keys=True,
        ensure_ascii=True,
        default=str,
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
