"""Itinerary planning: resolution, scheduling, gap filling, travel and assembly."""

from .assembler import assemble
from .gap_filler import GapFiller, GapFillState
from .pipeline import DayPlanner, build_default_planner
from .resolver import VenueResolver
from .scheduler import Scheduler
from .scoring import FillerScorer, WeightedFillerScorer
from .travel import TravelPlanner
from .weather_swap import WeatherSwapper

__all__ = [
    "DayPlanner",
    "FillerScorer",
    "GapFillState",
    "GapFiller",
    "Scheduler",
    "TravelPlanner",
    "VenueResolver",
    "WeatherSwapper",
    "WeightedFillerScorer",
    "assemble",
    "build_default_planner",
]
