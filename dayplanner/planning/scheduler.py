"""Assign start times and durations to resolved activities."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from dayplanner.config import Settings
from dayplanner.models.activity import ActivityRequest, ResolvedVenue
from dayplanner.models.common import StopKind
from dayplanner.models.itinerary import ScheduledStop
from dayplanner.normalize import map_activity_to_place_type
from dayplanner.verify.nonoverlap import assert_non_overlapping, find_overlap

logger = logging.getLogger(__name__)

SLOT_MINUTES = 5

# Typical visit length by place type, in minutes
DEFAULT_DURATIONS: dict[str, int] = {
    "restaurant": 90,
    "cafe": 45,
    "bakery": 30,
    "bar": 90,
    "night_club": 120,
    "museum": 120,
    "art_gallery": 60,
    "stadium": 180,
    "park": 60,
    "shopping_mall": 90,
    "tourist_attraction": 60,
    "movie_theater": 150,
    "lodging": 30,
}


def floor_to_slot(value: datetime) -> datetime:
    return value - timedelta(
        minutes=value.minute % SLOT_MINUTES, seconds=value.second, microseconds=value.microsecond
    )


def ceil_to_slot(value: datetime) -> datetime:
    floored = floor_to_slot(value)
    return floored if floored == value else floored + timedelta(minutes=SLOT_MINUTES)


def duration_for(request: ActivityRequest | None, venue: ResolvedVenue, default: int) -> int:
    """Duration from the activity's category, else the venue's types, else ``default``."""
    if request is not None:
        place_type = map_activity_to_place_type(request.description)
        if place_type in DEFAULT_DURATIONS:
            return DEFAULT_DURATIONS[place_type]
    for place_type in venue.types:
        if place_type in DEFAULT_DURATIONS:
            return DEFAULT_DURATIONS[place_type]
    return default


class Scheduler:
    """Turn ranked, resolved activities into a non-overlapping timeline.

    Explicit times are kept. Untimed activities between two timed ones are
    spread evenly across the gap (the plan start counts as a timed anchor);
    untimed activities after the last timed one are chained with the travel
    overhead between them. Collisions are then resolved by pushing the
    later stop back by the earlier stop's duration.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.tz = ZoneInfo(settings.timezone)

    def plan_start(self, day: date, start: time) -> datetime:
        return datetime.combine(day, start, tzinfo=self.tz)

    def assign_times(
        self,
        items: Sequence[tuple[ActivityRequest, ResolvedVenue]],
        plan_start: datetime,
    ) -> list[ScheduledStop]:
        ordered = sorted(items, key=lambda item: item[0].rank)
        overhead = timedelta(minutes=self.settings.travel_overhead_min)
        durations = [
            duration_for(request, venue, self.settings.default_activity_duration_min)
            for request, venue in ordered
        ]
        explicit = [
            datetime.combine(plan_start.date(), request.time, tzinfo=plan_start.tzinfo)
            if request.time is not None
            else None
            for request, _ in ordered
        ]

        starts: list[datetime] = []
        prev_end: datetime | None = None
        i = 0
        while i < len(ordered):
            if explicit[i] is not None:
                starts.append(explicit[i])
                prev_end = explicit[i] + timedelta(minutes=durations[i])
                i += 1
                continue

            j = i
            while j < len(ordered) and explicit[j] is None:
                j += 1
            run = j - i
            lo = plan_start if prev_end is None else prev_end + overhead
            hi = explicit[j] if j < len(ordered) else None

            if hi is not None and hi > lo:
                for m in range(1, run + 1):
                    starts.append(floor_to_slot(lo + (hi - lo) * m / (run + 1)))
                prev_end = starts[-1] + timedelta(minutes=durations[j - 1])
            else:
                cursor = lo
                for k in range(i, j):
                    start = floor_to_slot(cursor)
                    starts.append(start)
                    cursor = start + timedelta(minutes=durations[k]) + overhead
                prev_end = cursor - overhead
            i = j

        stops = [
            ScheduledStop(
                venue=venue,
                request=request,
                start=start,
                duration_min=duration,
                kind=StopKind.user_requested,
            )
            for (request, venue), start, duration in zip(ordered, starts, durations, strict=True)
        ]
        return self.resolve_collisions(stops)

    def resolve_collisions(self, stops: Sequence[ScheduledStop]) -> list[ScheduledStop]:
        """Shift later stops until the timeline is strictly ordered and disjoint."""
        timeline = sorted(stops, key=lambda s: (s.start, s.rank if s.rank is not None else -1))
        max_rounds = len(timeline) * len(timeline) + 1
        for _ in range(max_rounds):
            pair = find_overlap(timeline)
            if pair is None:
                break
            earlier, later = timeline[pair[0]], timeline[pair[1]]
            shifted = later.model_copy(
                update={"start": later.start + timedelta(minutes=earlier.duration_min)}
            )
            logger.info(
                f"Schedule conflict recovered: moved {later.venue.name!r} "
                f"from {later.start:%H:%M} to {shifted.start:%H:%M}"
            )
            timeline[pair[1]] = shifted
            timeline.sort(key=lambda s: (s.start, s.rank if s.rank is not None else -1))
        assert_non_overlapping(timeline)
        return timeline
