"""Tests for time assignment and collision recovery."""

from datetime import date, datetime, time
from zoneinfo import ZoneInfo

import pytest
from hypothesis import given, settings as hypothesis_settings
from hypothesis import strategies as st

from conftest import make_settings
from dayplanner.models import ActivityRequest, ResolvedVenue, StopKind
from dayplanner.planning import Scheduler
from dayplanner.planning.scheduler import ceil_to_slot, duration_for, floor_to_slot
from dayplanner.verify import find_overlap

TZ = ZoneInfo("America/New_York")
DAY = date(2024, 6, 1)


def item(description: str, at: time | None, rank: int, types: list[str] | None = None):
    request = ActivityRequest(description=description, time=at, rank=rank)
    venue = ResolvedVenue(
        place_id=f"place-{rank}",
        name=f"{description.title()} #{rank}",
        address="Boston, MA",
        types=types or [],
        confidence=0.9,
    )
    return request, venue


@pytest.fixture
def scheduler(settings) -> Scheduler:
    return Scheduler(settings)


@pytest.fixture
def start(scheduler) -> datetime:
    return scheduler.plan_start(DAY, time(9, 0))


def clock(stop) -> str:
    return stop.start.strftime("%H:%M")


def test_explicit_time_then_chained_activity(scheduler, start):
    """Lunch at 1pm for 90 minutes; coffee follows after the travel overhead."""
    stops = scheduler.assign_times([item("Lunch", time(13, 0), 0), item("coffee", None, 1)], start)

    assert [clock(s) for s in stops] == ["13:00", "14:45"]
    assert [s.duration_min for s in stops] == [90, 45]
    assert all(s.kind is StopKind.user_requested for s in stops)
    assert stops[0].start.tzinfo == TZ


def test_untimed_activities_are_spread_before_next_anchor(scheduler, start):
    stops = scheduler.assign_times(
        [item("coffee", None, 0), item("museum", None, 1), item("dinner", time(18, 0), 2)], start
    )

    assert [clock(s) for s in stops] == ["12:00", "15:00", "18:00"]


def test_untimed_activities_after_plan_start_are_chained(scheduler, start):
    stops = scheduler.assign_times([item("coffee", None, 0), item("museum", None, 1)], start)

    assert [clock(s) for s in stops] == ["09:00", "10:00"]


def test_same_explicit_time_is_shifted(scheduler, start):
    stops = scheduler.assign_times(
        [item("lunch", time(13, 0), 0), item("coffee", time(13, 0), 1)], start
    )

    assert [clock(s) for s in stops] == ["13:00", "14:30"]
    assert [s.request.rank for s in stops] == [0, 1]


def test_overlapping_explicit_times_are_shifted(scheduler, start):
    stops = scheduler.assign_times(
        [item("museum", time(10, 0), 0), item("lunch", time(11, 0), 1)], start
    )

    assert find_overlap(stops) is None
    assert clock(stops[1]) == "13:00"


def test_duration_falls_back_to_venue_types_then_default(settings):
    request, venue = item("stroll", None, 0, types=["museum"])
    assert duration_for(request, venue, 60) == 120
    assert duration_for(None, venue, 60) == 120

    request, venue = item("relax", None, 0, types=["premise"])
    assert duration_for(request, venue, 60) == 60


def test_slot_rounding():
    value = datetime(2024, 6, 1, 9, 7, 30, tzinfo=TZ)

    assert floor_to_slot(value) == datetime(2024, 6, 1, 9, 5, tzinfo=TZ)
    assert ceil_to_slot(value) == datetime(2024, 6, 1, 9, 10, tzinfo=TZ)
    assert ceil_to_slot(floor_to_slot(value)) == floor_to_slot(value)


_DESCRIPTIONS = ["lunch", "coffee", "museum", "drinks", "park", "Red Sox game", "shopping", "visit"]

_activity = st.tuples(
    st.sampled_from(_DESCRIPTIONS),
    st.one_of(st.none(), st.builds(time, st.integers(6, 22), st.sampled_from([0, 15, 30, 45]))),
)

_SCHEDULER = Scheduler(make_settings())


@hypothesis_settings(max_examples=75, deadline=None)
@given(st.lists(_activity, min_size=1, max_size=7), st.integers(6, 12))
def test_schedule_never_overlaps(activities, start_hour):
    """For any mix of timed and untimed activities the timeline is disjoint."""
    items = [item(description, at, rank) for rank, (description, at) in enumerate(activities)]
    plan_start = _SCHEDULER.plan_start(DAY, time(start_hour, 0))

    stops = _SCHEDULER.assign_times(items, plan_start)

    assert len(stops) == len(items)
    assert find_overlap(stops) is None
    for earlier, later in zip(stops, stops[1:]):
        assert earlier.end <= later.start
    assert {s.request.rank for s in stops} == set(range(len(items)))
    assert all(s.start.minute % 5 == 0 for s in stops)
    assert all(s.duration_min > 0 for s in stops)
