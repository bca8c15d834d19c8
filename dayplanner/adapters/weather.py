"""OpenWeatherMap forecast adapter."""

import logging
from datetime import datetime
from typing import Any

from dayplanner.adapters.http import JsonHttpClient
from dayplanner.config import Settings, get_settings
from dayplanner.exec.context import RunContext
from dayplanner.exec.executor import ToolExecutor
from dayplanner.exec.types import ToolRequest
from dayplanner.models.common import Geo
from dayplanner.models.tool_results import WeatherReport
from dayplanner.verify.weather import assess_forecast

logger = logging.getLogger(__name__)

WEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"


class OpenWeatherClient:
    """5-day / 3-hour forecast for a coordinate.

    As a tool callable it returns ``{"entries": [...]}`` where each entry
    keeps only ``dt``, ``main``, ``temp``, ``wind_ms`` and ``pop``.
    """

    def __init__(self, settings: Settings, http: JsonHttpClient | None = None) -> None:
        self.settings = settings
        self.http = http or JsonHttpClient(
            "weather", WEATHER_BASE_URL, timeout=settings.hard_timeout_s
        )

    def forecast(self, lat: float, lon: float) -> list[dict[str, Any]]:
        data = self.http.get_json(
            "forecast",
            {"lat": lat, "lon": lon, "units": "metric", "appid": self.settings.weather_api_key},
        )
        entries = []
        for item in data.get("list") or []:
            conditions = item.get("weather") or [{}]
            entries.append(
                {
                    "dt": item.get("dt", 0),
                    "main": conditions[0].get("main", ""),
                    "temp": (item.get("main") or {}).get("temp"),
                    "wind_ms": (item.get("wind") or {}).get("speed"),
                    "pop": item.get("pop"),
                }
            )
        return entries

    def __call__(self, args: dict[str, Any]) -> dict[str, Any]:
        return {"entries": self.forecast(args["lat"], args["lon"])}


def get_weather_report(
    executor: ToolExecutor,
    ctx: RunContext,
    location: Geo,
    when: datetime,
    *,
    settings: Settings | None = None,
) -> WeatherReport:
    """Weather suitability at a location and time.

    Coordinates are rounded to two decimals so nearby stops share a cached
    forecast.

    Raises:
        ExternalProviderFailure: The forecast could not be fetched.
    """
    settings = settings or get_settings()
    data = executor.execute_or_raise(
        ToolRequest(
            name="weather",
            args={"lat": round(location.lat, 2), "lon": round(location.lon, 2)},
            cache_ttl_s=settings.weather_ttl_minutes * 60,
        ),
        ctx,
    )
    report = assess_forecast(data.get("entries", []), when)
    logger.debug(
        f"Weather at {location.as_param()} around {when.isoformat()}: "
        f"{report.condition_category}, outdoor_suitable={report.is_outdoor_suitable}"
    )
    return report
