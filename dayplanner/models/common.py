"""Common data types and enums used across the application."""

from __future__ import annotations

import math
from datetime import time
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

EARTH_RADIUS_KM = 6371.0


class Geo(BaseModel):
    """Geographic coordinates in WGS84 decimal degrees."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(description="Latitude in decimal degrees")
    lon: float = Field(description="Longitude in decimal degrees")

    def as_param(self) -> str:
        """Render as the ``lat,lng`` string Google endpoints expect."""
        return f"{self.lat},{self.lon}"


def haversine_km(a: Geo, b: Geo) -> float:
    """Great-circle distance between two coordinates in kilometers."""
    d_lat = math.radians(b.lat - a.lat)
    d_lon = math.radians(b.lon - a.lon)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lon / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))


class TimeBucket(str, Enum):
    """Time-of-day bucket used for crowd levels."""

    morning = "morning"
    afternoon = "afternoon"
    evening = "evening"

    @classmethod
    def from_time(cls, value: time) -> TimeBucket:
        """Bucket a clock time: before noon, before 17:00, or later."""
        if value.hour < 12:
            return cls.morning
        if value.hour < 17:
            return cls.afternoon
        return cls.evening


class StopKind(str, Enum):
    """Origin of a scheduled stop."""

    user_requested = "user_requested"
    gap_filler = "gap_filler"


class TravelMode(str, Enum):
    """Transportation modes reported by the directions provider."""

    walking = "walking"
    transit = "transit"
    driving = "driving"
    bicycling = "bicycling"
