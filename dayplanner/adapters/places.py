"""Google Places text-search adapter."""

import logging
from typing import Any

from dayplanner.adapters.http import JsonHttpClient, raise_for_google_status
from dayplanner.config import Settings, get_settings
from dayplanner.exec.context import RunContext
from dayplanner.exec.executor import ToolExecutor
from dayplanner.exec.types import ToolRequest
from dayplanner.models.common import Geo
from dayplanner.models.tool_results import PlaceCandidate

logger = logging.getLogger(__name__)

PLACES_BASE_URL = "https://maps.googleapis.com/maps/api/place"


class GooglePlacesClient:
    """Text search biased to the metro center.

    Instances are tool callables: ``client({"query": ..., "type": ...})``
    returns ``{"results": [...]}`` with candidates as plain dicts.
    """

    def __init__(self, settings: Settings, http: JsonHttpClient | None = None) -> None:
        self.settings = settings
        self.http = http or JsonHttpClient(
            "places", PLACES_BASE_URL, timeout=settings.hard_timeout_s
        )

    def text_search(self, query: str, place_type: str | None = None) -> list[PlaceCandidate]:
        params: dict[str, Any] = {
            "query": query,
            "key": self.settings.google_maps_api_key,
            "location": f"{self.settings.metro_center_lat},{self.settings.metro_center_lon}",
            "radius": self.settings.search_radius_m,
            "language": "en",
        }
        if place_type:
            params["type"] = place_type
        data = self.http.get_json("textsearch/json", params)
        raise_for_google_status("places", data)
        results = [_parse_result(item) for item in data.get("results", [])]
        logger.debug(f"Place search {query!r} returned {len(results)} result(s)")
        return results

    def __call__(self, args: dict[str, Any]) -> dict[str, Any]:
        candidates = self.text_search(args["query"], args.get("type"))
        return {"results": [c.model_dump(mode="json") for c in candidates]}


def _parse_result(item: dict[str, Any]) -> PlaceCandidate:
    location = (item.get("geometry") or {}).get("location") or {}
    geo = None
    if "lat" in location and "lng" in location:
        geo = Geo(lat=location["lat"], lon=location["lng"])
    return PlaceCandidate(
        place_id=item.get("place_id", ""),
        name=item.get("name", ""),
        formatted_address=item.get("formatted_address", ""),
        types=item.get("types", []),
        rating=item.get("rating"),
        location=geo,
    )


def search_places(
    executor: ToolExecutor,
    ctx: RunContext,
    query: str,
    place_type: str | None = None,
    *,
    settings: Settings | None = None,
) -> list[PlaceCandidate]:
    """Search places through the executor.

    Raises:
        ExternalProviderFailure: The search failed after retries.
    """
    settings = settings or get_settings()
    args: dict[str, Any] = {"query": query}
    if place_type:
        args["type"] = place_type
    data = executor.execute_or_raise(
        ToolRequest(name="places", args=args, cache_ttl_s=settings.places_ttl_hours * 3600),
        ctx,
    )
    return [PlaceCandidate.model_validate(item) for item in data.get("results", [])]
