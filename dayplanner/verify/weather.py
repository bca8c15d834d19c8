"""Weather suitability rules for outdoor venues.

Pure functions: forecast entries in, verdicts out.
"""

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

from dayplanner.models.tool_results import WeatherReport

# Thresholds
PRECIP_THRESHOLD = 0.60  # 60% precipitation probability
WIND_THRESHOLD_KMH = 30.0  # 30 km/h wind speed
MAX_TEMP_C = 30.0
MIN_TEMP_C = 5.0
# Forecast entries are 3-hourly; anything further away says nothing about the day
MAX_FORECAST_DISTANCE = timedelta(hours=3)

BAD_CONDITIONS = frozenset({"Rain", "Thunderstorm", "Snow", "Drizzle"})

_CATEGORY_BY_MAIN = {
    "Clear": "clear",
    "Clouds": "cloudy",
    "Rain": "rain",
    "Drizzle": "rain",
    "Thunderstorm": "storm",
    "Snow": "snow",
}

OUTDOOR_TYPES = frozenset(
    {"park", "campground", "natural_feature", "tourist_attraction", "zoo", "amusement_park"}
)
# These override an outdoor type on the same venue
STRONG_INDOOR_TYPES = frozenset(
    {
        "museum",
        "restaurant",
        "cafe",
        "bar",
        "movie_theater",
        "shopping_mall",
        "department_store",
        "library",
    }
)


OUTDOOR_KEYWORDS = (
    "park",
    "pond",
    "arboretum",
    "trail",
    "beach",
    "garden",
    "common",
    "square",
    "street",
    "harbor",
    "waterfront",
    "yard",
    "monument",
)


def looks_outdoor(name: str) -> bool:
    """Guess from an attraction's name whether it is outdoors."""
    lowered = name.lower()
    return any(keyword in lowered for keyword in OUTDOOR_KEYWORDS)


def is_venue_outdoor(types: Iterable[str]) -> bool:
    types = set(types)
    if types & STRONG_INDOOR_TYPES:
        return False
    return bool(types & OUTDOOR_TYPES)


def closest_entry(
    entries: Iterable[Mapping[str, Any]],
    when: datetime,
    max_distance: timedelta = MAX_FORECAST_DISTANCE,
) -> Mapping[str, Any] | None:
    """Entry nearest to ``when``, or None when none lies within ``max_distance``."""
    target = when.astimezone(UTC).timestamp() if when.tzinfo else when.timestamp()
    best: Mapping[str, Any] | None = None
    for entry in entries:
        if best is None or abs(entry.get("dt", 0) - target) < abs(best.get("dt", 0) - target):
            best = entry
    if best is None or abs(best.get("dt", 0) - target) > max_distance.total_seconds():
        return None
    return best


def assess_forecast(entries: Iterable[Mapping[str, Any]], when: datetime) -> WeatherReport:
    """Judge the forecast entry closest to ``when``.

    Unsuitable when it rains, drizzles, snows or storms, when the
    temperature is above 30°C or below 5°C, when precipitation probability
    reaches 60%, or when wind reaches 30 km/h. No forecast within three
    hours of ``when`` (e.g. a day past the 5-day horizon) counts as unknown
    and suitable.
    """
    entry = closest_entry(entries, when)
    if entry is None:
        return WeatherReport(condition_category="unknown", is_outdoor_suitable=True)

    main = entry.get("main") or ""
    temp = entry.get("temp")
    wind_ms = entry.get("wind_ms")
    wind_kmh = round(wind_ms * 3.6, 1) if wind_ms is not None else None
    pop = entry.get("pop") or 0.0

    unsuitable = (
        main in BAD_CONDITIONS
        or (temp is not None and (temp > MAX_TEMP_C or temp < MIN_TEMP_C))
        or pop >= PRECIP_THRESHOLD
        or (wind_kmh is not None and wind_kmh >= WIND_THRESHOLD_KMH)
    )
    return WeatherReport(
        condition_category=_CATEGORY_BY_MAIN.get(main, main.lower() or "unknown"),
        is_outdoor_suitable=not unsuitable,
        temperature_c=temp,
        wind_kmh=wind_kmh,
        forecast_time=datetime.fromtimestamp(entry.get("dt", 0), UTC),
    )
