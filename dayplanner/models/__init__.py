"""Convenient imports for all model types."""

# Common types and enums
from .common import Geo, StopKind, TimeBucket, TravelMode, haversine_km

# Area models
from .area import Area, CrowdLevels

# Activity models
from .activity import ActivityRequest, ResolvedVenue, Unresolved

# Itinerary models
from .itinerary import (
    AlternativeOut,
    Itinerary,
    ItineraryOut,
    PlaceDetailsOut,
    PlaceOut,
    ScheduledStop,
    TravelLeg,
    TravelTimeOut,
    UnresolvedOut,
)

# Plan models
from .plan import PlanRequest

# Tool result models
from .tool_results import DirectionsResult, PlaceCandidate, WeatherReport

__all__ = [
    # Common
    "Geo",
    "StopKind",
    "TimeBucket",
    "TravelMode",
    "haversine_km",
    # Area
    "Area",
    "CrowdLevels",
    # Activity
    "ActivityRequest",
    "ResolvedVenue",
    "Unresolved",
    # Itinerary
    "AlternativeOut",
    "Itinerary",
    "ItineraryOut",
    "PlaceDetailsOut",
    "PlaceOut",
    "ScheduledStop",
    "TravelLeg",
    "TravelTimeOut",
    "UnresolvedOut",
    # Plan
    "PlanRequest",
    # Tool results
    "DirectionsResult",
    "PlaceCandidate",
    "WeatherReport",
]
