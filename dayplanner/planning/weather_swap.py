"""Swap outdoor stops for an indoor runner-up when the forecast is poor."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from dayplanner.adapters.weather import get_weather_report
from dayplanner.config import Settings
from dayplanner.errors import ExternalProviderFailure
from dayplanner.exec.context import RunContext
from dayplanner.exec.executor import ToolExecutor
from dayplanner.models.activity import ResolvedVenue
from dayplanner.models.common import Geo, StopKind
from dayplanner.models.itinerary import ScheduledStop
from dayplanner.planning.pool import run_pooled
from dayplanner.verify.weather import is_venue_outdoor

logger = logging.getLogger(__name__)


def indoor_alternative(venue: ResolvedVenue) -> ResolvedVenue | None:
    """First runner-up that is not an outdoor venue."""
    return next((alt for alt in venue.alternatives if not is_venue_outdoor(alt.types)), None)


class WeatherSwapper:
    """Replace outdoor user stops with an indoor alternative in bad weather.

    Only user-requested stops with an outdoor venue and at least one
    alternative trigger a forecast lookup. The stop keeps its time and
    duration; the original venue becomes the first alternative of its
    replacement. A failed forecast leaves the stop as it is.
    """

    def __init__(self, executor: ToolExecutor, settings: Settings) -> None:
        self.executor = executor
        self.settings = settings

    def adjust_stop(self, stop: ScheduledStop, ctx: RunContext) -> ScheduledStop:
        venue = stop.venue
        if stop.kind is not StopKind.user_requested or not is_venue_outdoor(venue.types):
            return stop
        replacement = indoor_alternative(venue)
        if replacement is None:
            return stop

        location = venue.location or Geo(
            lat=self.settings.metro_center_lat, lon=self.settings.metro_center_lon
        )
        try:
            report = get_weather_report(
                self.executor, ctx, location, stop.start, settings=self.settings
            )
        except ExternalProviderFailure as e:
            logger.warning(f"Keeping {venue.name!r} without a forecast: {e}")
            return stop
        if report.is_outdoor_suitable:
            return stop

        logger.info(
            f"Swapped {venue.name!r} for {replacement.name!r} ({report.condition_category})",
            extra={"run_id": ctx.run_id},
        )
        others = [alt for alt in venue.alternatives if alt.place_id != replacement.place_id]
        demoted = venue.model_copy(update={"alternatives": []})
        swapped = replacement.model_copy(update={"alternatives": [demoted, *others]})
        return stop.model_copy(update={"venue": swapped})

    def adjust(self, stops: Sequence[ScheduledStop], ctx: RunContext) -> list[ScheduledStop]:
        return run_pooled(
            lambda stop: self.adjust_stop(stop, ctx), stops, ctx, self.settings.fanout_cap
        )
