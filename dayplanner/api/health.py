"""Health check endpoint for provider configuration status."""

from typing import Literal

from pydantic import BaseModel

from dayplanner.config import get_settings, has_real_key
from dayplanner.knowledge import load_default_knowledge_base


class HealthStatus(BaseModel):
    """Health check response."""

    status: Literal["ok", "degraded"]
    checks: dict[str, Literal["ok", "unconfigured"]]
    areas: int


def get_health() -> HealthStatus:
    """
    Report whether each provider has a key and the area knowledge loaded.

    A missing extractor key is not a degradation: extraction falls back to
    the rule-based parser.
    """
    settings = get_settings()
    checks: dict[str, Literal["ok", "unconfigured"]] = {
        "places": "ok" if has_real_key(settings.google_maps_api_key) else "unconfigured",
        "directions": "ok" if has_real_key(settings.google_maps_api_key) else "unconfigured",
        "weather": "ok" if has_real_key(settings.weather_api_key) else "unconfigured",
        "extractor": "ok" if has_real_key(settings.openai_api_key) else "unconfigured",
    }
    required = ("places", "directions", "weather")
    overall: Literal["ok", "degraded"] = (
        "ok" if all(checks[name] == "ok" for name in required) else "degraded"
    )
    return HealthStatus(
        status=overall, checks=checks, areas=len(load_default_knowledge_base())
    )
