"""External provider adapters (Places, Directions, Weather)."""

from dayplanner.config import Settings
from dayplanner.exec.executor import DictToolRegistry

from .directions import GoogleDirectionsClient, get_directions
from .places import GooglePlacesClient, search_places
from .weather import OpenWeatherClient, get_weather_report


def build_registry(settings: Settings) -> DictToolRegistry:
    """Registry wired to the live HTTP providers."""
    return DictToolRegistry(
        {
            "places": GooglePlacesClient(settings),
            "directions": GoogleDirectionsClient(settings),
            "weather": OpenWeatherClient(settings),
        }
    )


__all__ = [
    "GoogleDirectionsClient",
    "GooglePlacesClient",
    "OpenWeatherClient",
    "build_registry",
    "get_directions",
    "get_weather_report",
    "search_places",
]
