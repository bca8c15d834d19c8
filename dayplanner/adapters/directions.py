"""Google Directions adapter for travel time between stops."""

import math
from typing import Any

from dayplanner.adapters.http import JsonHttpClient, raise_for_google_status
from dayplanner.config import Settings
from dayplanner.errors import PermanentProviderError
from dayplanner.exec.context import RunContext
from dayplanner.exec.executor import ToolExecutor
from dayplanner.exec.types import ToolRequest
from dayplanner.models.common import Geo, TravelMode
from dayplanner.models.tool_results import DirectionsResult

DIRECTIONS_BASE_URL = "https://maps.googleapis.com/maps/api"


class GoogleDirectionsClient:
    """Travel duration between two places.

    Origins and destinations are either ``lat,lng`` strings or free-text
    addresses.
    """

    def __init__(self, settings: Settings, http: JsonHttpClient | None = None) -> None:
        self.settings = settings
        self.http = http or JsonHttpClient(
            "directions", DIRECTIONS_BASE_URL, timeout=settings.hard_timeout_s
        )

    def directions(self, origin: str, destination: str, mode: TravelMode) -> DirectionsResult:
        data = self.http.get_json(
            "directions/json",
            {
                "origin": origin,
                "destination": destination,
                "mode": mode.value,
                "key": self.settings.google_maps_api_key,
            },
        )
        raise_for_google_status("directions", data)
        routes = data.get("routes") or []
        if not routes or not routes[0].get("legs"):
            raise PermanentProviderError("directions", "no route found")
        seconds = sum(leg.get("duration", {}).get("value", 0) for leg in routes[0]["legs"])
        return DirectionsResult(duration_minutes=math.ceil(seconds / 60), mode=mode)

    def __call__(self, args: dict[str, Any]) -> dict[str, Any]:
        result = self.directions(args["origin"], args["destination"], TravelMode(args["mode"]))
        return result.model_dump(mode="json")


def endpoint_param(name: str, address: str, location: Geo | None) -> str:
    """Prefer coordinates; fall back to the name and address."""
    if location is not None:
        return location.as_param()
    return f"{name}, {address}" if address else name


def get_directions(
    executor: ToolExecutor,
    ctx: RunContext,
    origin: str,
    destination: str,
    mode: TravelMode,
) -> DirectionsResult:
    """Fetch directions through the executor.

    Raises:
        ExternalProviderFailure: The lookup failed after retries.
    """
    data = executor.execute_or_raise(
        ToolRequest(
            name="directions",
            args={"origin": origin, "destination": destination, "mode": mode.value},
        ),
        ctx,
    )
    return DirectionsResult.model_validate(data)
