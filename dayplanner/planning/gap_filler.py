"""Fill long idle gaps between stops with nearby attractions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from dayplanner.adapters.places import search_places
from dayplanner.adapters.weather import get_weather_report
from dayplanner.config import Settings
from dayplanner.errors import ExternalProviderFailure
from dayplanner.exec.context import RunContext
from dayplanner.exec.executor import ToolExecutor
from dayplanner.knowledge.base import AreaKnowledgeBase
from dayplanner.models.activity import ResolvedVenue
from dayplanner.models.common import Geo, StopKind, TimeBucket
from dayplanner.models.itinerary import ScheduledStop
from dayplanner.models.tool_results import PlaceCandidate, WeatherReport
from dayplanner.normalize import LocationNormalizer
from dayplanner.planning.scheduler import ceil_to_slot
from dayplanner.planning.scoring import (
    PACE_MAX_CROWD,
    FillerCandidate,
    FillerScorer,
    GapContext,
    WeightedFillerScorer,
)
from dayplanner.verify.nonoverlap import find_overlap
from dayplanner.verify.weather import is_venue_outdoor

logger = logging.getLogger(__name__)

# Ranked candidates tried per gap before giving up
MAX_ATTEMPTS_PER_GAP = 3
FILLER_CONFIDENCE = 0.5


@dataclass(frozen=True)
class GapFillState:
    """Reducer state: the timeline so far and the next stop to examine.

    ``cursor`` points at the stop that ends the gap under evaluation; the
    gap starts at the previous stop's end, or at the plan start for the
    first stop.
    """

    stops: tuple[ScheduledStop, ...]
    cursor: int = 0
    fillers_added: int = 0
    used_areas: frozenset[str] = frozenset()
    used_venues: frozenset[str] = frozenset()


class GapFiller:
    """Sequential reducer that inserts filler stops into long idle gaps.

    User-requested stops are never moved or removed. A gap is left as is
    when no candidate passes the crowd, weather and repetition filters, or
    when any provider lookup fails.
    """

    def __init__(
        self,
        kb: AreaKnowledgeBase,
        normalizer: LocationNormalizer,
        executor: ToolExecutor,
        settings: Settings,
        scorer: FillerScorer | None = None,
    ) -> None:
        self.kb = kb
        self.normalizer = normalizer
        self.executor = executor
        self.settings = settings
        self.scorer = scorer or WeightedFillerScorer.from_settings(settings)

    def initial_state(self, stops: list[ScheduledStop]) -> GapFillState:
        return GapFillState(
            stops=tuple(stops),
            used_areas=frozenset(s.venue.area for s in stops if s.venue.area),
            used_venues=frozenset(
                key for s in stops for key in (s.venue.place_id, s.venue.name.lower())
            ),
        )

    def done(self, state: GapFillState) -> bool:
        return (
            state.cursor >= len(state.stops)
            or state.fillers_added >= self.settings.max_fillers
        )

    def fill_gaps(
        self, stops: list[ScheduledStop], plan_start: datetime, ctx: RunContext
    ) -> list[ScheduledStop]:
        state = self.initial_state(stops)
        while not self.done(state):
            ctx.raise_if_aborted()
            state = self.step(state, plan_start, ctx)
        if state.fillers_added:
            logger.info(f"Inserted {state.fillers_added} gap filler(s)")
        return list(state.stops)

    def step(self, state: GapFillState, plan_start: datetime, ctx: RunContext) -> GapFillState:
        """Evaluate the gap before ``stops[cursor]`` and return the next state."""
        advance = replace(state, cursor=state.cursor + 1)
        following = state.stops[state.cursor]
        previous = state.stops[state.cursor - 1] if state.cursor > 0 else None
        gap_start = previous.end if previous is not None else plan_start
        overhead = timedelta(minutes=self.settings.travel_overhead_min)

        idle = following.start - gap_start - overhead
        if idle < timedelta(minutes=self.settings.min_filler_gap_min):
            return advance

        start = ceil_to_slot(gap_start + overhead)
        available = int((following.start - overhead - start).total_seconds() // 60)
        duration = min(self.settings.filler_duration_min, available)
        if duration < self.settings.min_filler_duration_min:
            return advance

        anchor = previous or following
        try:
            filler = self._pick_filler(state, anchor, start, duration, ctx)
        except ExternalProviderFailure as e:
            logger.warning(f"Gap before {following.venue.name!r} left unfilled: {e}")
            return advance
        if filler is None:
            return advance

        stops = list(state.stops)
        stops.insert(state.cursor, filler)
        if find_overlap(stops) is not None:
            logger.info(f"Discarded filler {filler.venue.name!r}: it would collide")
            return advance

        return GapFillState(
            stops=tuple(stops),
            cursor=state.cursor + 1,
            fillers_added=state.fillers_added + 1,
            used_areas=state.used_areas | ({filler.venue.area} if filler.venue.area else set()),
            used_venues=state.used_venues | {filler.venue.place_id, filler.venue.name.lower()},
        )

    def candidates(self, current_area: str | None, state: GapFillState) -> list[FillerCandidate]:
        """Attractions near the current area first, then in its region, then anywhere."""
        current = self.kb.get(current_area)
        tiers: list[list] = [[], [], list(self.kb)]
        if current is not None:
            tiers[0] = self.kb.nearby(current.name)[1:]
            tiers[1] = self.kb.in_region(current.region)

        seen: set[str] = set()
        result: list[FillerCandidate] = []
        for tier, areas in enumerate(tiers):
            for area in areas:
                if area.name in seen or area.name in state.used_areas:
                    continue
                seen.add(area.name)
                for attraction in area.attractions:
                    if attraction.lower() in state.used_venues:
                        continue
                    result.append(FillerCandidate(area, attraction, tier))
        return result

    def _gap_weather(
        self, anchor: ScheduledStop, start: datetime, ctx: RunContext
    ) -> WeatherReport:
        location = anchor.venue.location or Geo(
            lat=self.settings.metro_center_lat, lon=self.settings.metro_center_lon
        )
        return get_weather_report(self.executor, ctx, location, start, settings=self.settings)

    def _pick_filler(
        self,
        state: GapFillState,
        anchor: ScheduledStop,
        start: datetime,
        duration: int,
        ctx: RunContext,
    ) -> ScheduledStop | None:
        gap = GapContext(
            bucket=TimeBucket.from_time(start.time()),
            is_weekend=start.weekday() >= 5,
            weather=self._gap_weather(anchor, start, ctx),
            max_crowd=PACE_MAX_CROWD[self.settings.filler_pace],
        )
        pool = [
            candidate
            for candidate in self.candidates(anchor.venue.area, state)
            if candidate.area.crowd_levels.for_bucket(gap.bucket, gap.is_weekend) <= gap.max_crowd
        ]
        ranked = sorted(pool, key=lambda c: self.scorer.score(c, gap), reverse=True)

        for candidate in ranked[:MAX_ATTEMPTS_PER_GAP]:
            venue = self._lookup(candidate, state, gap.weather, ctx)
            if venue is None:
                continue
            logger.info(
                f"Filling gap at {start:%H:%M} with {venue.name!r} in {candidate.area.name}",
                extra={"run_id": ctx.run_id, "tier": candidate.tier},
            )
            return ScheduledStop(
                venue=venue,
                request=None,
                start=start,
                duration_min=duration,
                kind=StopKind.gap_filler,
            )
        return None

    def _lookup(
        self,
        candidate: FillerCandidate,
        state: GapFillState,
        weather: WeatherReport | None,
        ctx: RunContext,
    ) -> ResolvedVenue | None:
        query = f"{candidate.attraction}, {candidate.area.name}, {self.settings.metro_name}"
        results = search_places(self.executor, ctx, query, settings=self.settings)
        for place in results:
            if self._is_used(place, state):
                continue
            if weather is not None and not weather.is_outdoor_suitable and is_venue_outdoor(
                place.types
            ):
                logger.debug(f"Skipping outdoor filler {place.name!r} in bad weather")
                continue
            return ResolvedVenue(
                place_id=place.place_id,
                name=place.name,
                address=place.formatted_address,
                types=place.types,
                rating=place.rating,
                location=place.location,
                confidence=FILLER_CONFIDENCE,
                area=candidate.area.name,
            )
        return None

    @staticmethod
    def _is_used(place: PlaceCandidate, state: GapFillState) -> bool:
        return place.place_id in state.used_venues or place.name.lower() in state.used_venues
