"""Temporal consistency checks for scheduled stops."""

from collections.abc import Sequence

from dayplanner.errors import ScheduleConflict
from dayplanner.models.itinerary import ScheduledStop


def find_overlap(stops: Sequence[ScheduledStop]) -> tuple[int, int] | None:
    """Index pair of the first two consecutive stops that overlap or are out of order."""
    for i in range(len(stops) - 1):
        if stops[i].end > stops[i + 1].start or stops[i].start >= stops[i + 1].start:
            return i, i + 1
    return None


def assert_non_overlapping(stops: Sequence[ScheduledStop]) -> None:
    """Raise ScheduleConflict unless stops are strictly ordered and disjoint."""
    pair = find_overlap(stops)
    if pair is not None:
        earlier, later = stops[pair[0]], stops[pair[1]]
        raise ScheduleConflict(earlier.venue.name, later.venue.name)
