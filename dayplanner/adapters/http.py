"""Shared HTTP plumbing for provider adapters."""

import logging
from typing import Any

import httpx

from dayplanner.errors import PermanentProviderError, ProviderKind, TransientProviderError

logger = logging.getLogger(__name__)

# Google-style ``status`` values that are worth one retry
TRANSIENT_STATUSES = frozenset({"OVER_QUERY_LIMIT", "UNKNOWN_ERROR", "RESOURCE_EXHAUSTED"})


class JsonHttpClient:
    """Synchronous JSON GET client that maps failures onto provider errors.

    Timeouts, connection errors, 429 and 5xx responses raise
    ``TransientProviderError``; other 4xx responses and undecodable bodies
    raise ``PermanentProviderError``.
    """

    def __init__(
        self,
        kind: ProviderKind,
        base_url: str,
        timeout: float = 5.0,
        client: httpx.Client | None = None,
    ) -> None:
        self.kind = kind
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout)

    def get_json(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self._client.get(url, params=params)
        except httpx.TimeoutException as e:
            raise TransientProviderError(self.kind, f"request timed out: {e}") from e
        except httpx.TransportError as e:
            raise TransientProviderError(self.kind, f"connection failed: {e}") from e

        if response.status_code == 429 or response.status_code >= 500:
            raise TransientProviderError(self.kind, f"HTTP {response.status_code}")
        if response.status_code >= 400:
            raise PermanentProviderError(self.kind, f"HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise PermanentProviderError(self.kind, "response was not JSON") from e
        if not isinstance(data, dict):
            raise PermanentProviderError(self.kind, "unexpected response shape")
        return data

    def close(self) -> None:
        self._client.close()


def raise_for_google_status(kind: ProviderKind, data: dict[str, Any]) -> None:
    """Raise for a Google Maps ``status`` other than OK / ZERO_RESULTS."""
    status = data.get("status", "OK")
    if status in ("OK", "ZERO_RESULTS"):
        return
    detail = f"{status}: {data.get('error_message', '')}".rstrip(": ")
    if status in TRANSIENT_STATUSES:
        raise TransientProviderError(kind, detail)
    raise PermanentProviderError(kind, detail)
