"""Travel legs between consecutive stops."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from dayplanner.adapters.directions import endpoint_param, get_directions
from dayplanner.config import Settings
from dayplanner.errors import ExternalProviderFailure
from dayplanner.exec.context import RunContext
from dayplanner.exec.executor import ToolExecutor
from dayplanner.models.common import TravelMode, haversine_km
from dayplanner.models.itinerary import ScheduledStop, TravelLeg
from dayplanner.planning.pool import run_pooled

logger = logging.getLogger(__name__)

FALLBACK_SPEED_KMH = 20.0
WALKING_MAX_KM = 1.5


def choose_mode(origin: ScheduledStop, destination: ScheduledStop) -> TravelMode:
    """Walk short hops between known coordinates; otherwise take transit."""
    a, b = origin.venue.location, destination.venue.location
    if a is not None and b is not None and haversine_km(a, b) <= WALKING_MAX_KM:
        return TravelMode.walking
    return TravelMode.transit


def estimate_minutes(origin: ScheduledStop, destination: ScheduledStop, placeholder: int) -> int:
    """Straight-line distance at 20 km/h, never below ``placeholder``."""
    a, b = origin.venue.location, destination.venue.location
    if a is None or b is None:
        return placeholder
    minutes = math.ceil(haversine_km(a, b) / FALLBACK_SPEED_KMH * 60)
    return max(minutes, placeholder)


class TravelPlanner:
    """Ask the directions provider for each consecutive pair of stops."""

    def __init__(self, executor: ToolExecutor, settings: Settings) -> None:
        self.executor = executor
        self.settings = settings

    def leg(
        self, origin: ScheduledStop, destination: ScheduledStop, ctx: RunContext
    ) -> TravelLeg:
        mode = choose_mode(origin, destination)
        try:
            result = get_directions(
                self.executor,
                ctx,
                endpoint_param(origin.venue.name, origin.venue.address, origin.venue.location),
                endpoint_param(
                    destination.venue.name, destination.venue.address, destination.venue.location
                ),
                mode,
            )
        except ExternalProviderFailure as e:
            minutes = estimate_minutes(origin, destination, self.settings.placeholder_travel_min)
            logger.warning(
                f"Directions unavailable from {origin.venue.name!r} to "
                f"{destination.venue.name!r}, estimating {minutes} min: {e}"
            )
            return TravelLeg(
                origin=origin.venue.name,
                to=destination.venue.name,
                duration_min=minutes,
                mode=mode,
                estimated=True,
            )
        return TravelLeg(
            origin=origin.venue.name,
            to=destination.venue.name,
            duration_min=result.duration_minutes,
            mode=result.mode,
            estimated=False,
        )

    def plan_legs(self, stops: Sequence[ScheduledStop], ctx: RunContext) -> list[TravelLeg]:
        pairs = list(zip(stops, stops[1:]))
        return run_pooled(
            lambda pair: self.leg(pair[0], pair[1], ctx),
            pairs,
            ctx,
            self.settings.fanout_cap,
        )
