"""Merge scheduled stops and travel legs into the final itinerary."""

from collections.abc import Sequence
from datetime import UTC, datetime

from dayplanner.errors import ScheduleConflict
from dayplanner.models.activity import Unresolved
from dayplanner.models.itinerary import Itinerary, ScheduledStop, TravelLeg
from dayplanner.verify.nonoverlap import assert_non_overlapping


def assemble(
    stops: Sequence[ScheduledStop],
    legs: Sequence[TravelLeg],
    unresolved: Sequence[Unresolved] = (),
    user_id: str | None = None,
    created_at: datetime | None = None,
) -> Itinerary:
    """Build the itinerary after re-checking ordering and leg count.

    Raises:
        ScheduleConflict: Stops overlap or legs do not join consecutive stops.
    """
    assert_non_overlapping(stops)
    expected = max(len(stops) - 1, 0)
    if len(legs) != expected:
        raise ScheduleConflict(f"{len(stops)} stops", f"{len(legs)} travel legs")
    for leg, origin, destination in zip(legs, stops, stops[1:]):
        if leg.origin != origin.venue.name or leg.to != destination.venue.name:
            raise ScheduleConflict(origin.venue.name, destination.venue.name)
    return Itinerary(
        user_id=user_id,
        created_at=created_at or datetime.now(UTC),
        stops=list(stops),
        legs=list(legs),
        unresolved=list(unresolved),
    )
