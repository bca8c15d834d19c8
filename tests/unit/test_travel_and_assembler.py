"""Tests for travel legs and itinerary assembly."""

from datetime import UTC, datetime, time

import pytest

from conftest import failing_tool, make_settings
from dayplanner.errors import ScheduleConflict
from dayplanner.exec import DictToolRegistry, ToolExecutor
from dayplanner.models import (
    Geo,
    ItineraryOut,
    ResolvedVenue,
    ScheduledStop,
    StopKind,
    TravelLeg,
    TravelMode,
)
from dayplanner.planning import Scheduler, TravelPlanner, assemble
from dayplanner.planning.travel import choose_mode, estimate_minutes

FENWAY = Geo(lat=42.3467, lon=-71.0972)
KENMORE = Geo(lat=42.3489, lon=-71.0951)
SEAPORT = Geo(lat=42.3519, lon=-71.0445)


def stop(name: str, at: time, minutes: int, location: Geo | None) -> ScheduledStop:
    return ScheduledStop(
        venue=ResolvedVenue(
            place_id=f"place-{name}",
            name=name,
            address=f"{name}, Boston, MA",
            location=location,
            confidence=0.9,
        ),
        start=Scheduler(make_settings()).plan_start(datetime(2024, 6, 1).date(), at),
        duration_min=minutes,
        kind=StopKind.user_requested,
    )


def test_short_hops_walk_and_longer_ones_take_transit():
    assert choose_mode(stop("a", time(9), 30, FENWAY), stop("b", time(10), 30, KENMORE)) is (
        TravelMode.walking
    )
    assert choose_mode(stop("a", time(9), 30, FENWAY), stop("b", time(10), 30, SEAPORT)) is (
        TravelMode.transit
    )
    assert choose_mode(stop("a", time(9), 30, None), stop("b", time(10), 30, KENMORE)) is (
        TravelMode.transit
    )


def test_estimate_never_below_placeholder():
    near = estimate_minutes(stop("a", time(9), 30, FENWAY), stop("b", time(10), 30, KENMORE), 30)
    unknown = estimate_minutes(stop("a", time(9), 30, None), stop("b", time(10), 30, None), 30)

    assert near == 30
    assert unknown == 30


def test_plan_legs_uses_directions(executor, settings, ctx, directions):
    stops = [
        stop("Fenway Park", time(9), 60, FENWAY),
        stop("Kenmore", time(11), 60, KENMORE),
        stop("Seaport", time(13), 60, SEAPORT),
    ]

    legs = TravelPlanner(executor, settings).plan_legs(stops, ctx)

    assert [(leg.origin, leg.to) for leg in legs] == [("Fenway Park", "Kenmore"), ("Kenmore", "Seaport")]
    assert [leg.mode for leg in legs] == [TravelMode.walking, TravelMode.transit]
    assert all(leg.duration_min == 12 and not leg.estimated for leg in legs)
    assert FENWAY.as_param() in {call["origin"] for call in directions.calls}


def test_directions_failure_falls_back_to_estimate(settings, ctx):
    executor = ToolExecutor(DictToolRegistry({"directions": failing_tool("directions")}), settings)
    stops = [stop("Fenway Park", time(9), 60, FENWAY), stop("Seaport", time(13), 60, SEAPORT)]
    try:
        [leg] = TravelPlanner(executor, settings).plan_legs(stops, ctx)
    finally:
        executor.shutdown()

    assert leg.estimated is True
    assert leg.duration_min >= settings.placeholder_travel_min


def test_single_stop_has_no_legs(executor, settings, ctx):
    assert TravelPlanner(executor, settings).plan_legs([stop("a", time(9), 30, FENWAY)], ctx) == []


def leg(origin: str, to: str) -> TravelLeg:
    return TravelLeg(origin=origin, to=to, duration_min=10, mode=TravelMode.walking)


def test_assemble_builds_itinerary():
    stops = [stop("a", time(9), 30, FENWAY), stop("b", time(10), 30, KENMORE)]
    created = datetime(2024, 6, 1, 12, tzinfo=UTC)

    itinerary = assemble(stops, [leg("a", "b")], user_id="user-1", created_at=created)
    out = ItineraryOut.from_itinerary(itinerary).model_dump(by_alias=True, mode="json")

    assert out["userId"] == "user-1"
    assert [p["name"] for p in out["places"]] == ["a", "b"]
    assert out["places"][0]["displayTime"] == "9:00 AM"
    assert out["places"][0]["scheduledTime"].startswith("2024-06-01T09:00:00")
    assert len(out["travelTimes"]) == len(out["places"]) - 1
    assert out["travelTimes"][0] == {"duration": 10, "to": "b", "mode": "walking", "estimated": False}


def test_assemble_rejects_wrong_leg_count():
    stops = [stop("a", time(9), 30, FENWAY), stop("b", time(10), 30, KENMORE)]

    with pytest.raises(ScheduleConflict):
        assemble(stops, [])


def test_assemble_rejects_mismatched_legs():
    stops = [stop("a", time(9), 30, FENWAY), stop("b", time(10), 30, KENMORE)]

    with pytest.raises(ScheduleConflict):
        assemble(stops, [leg("a", "c")])


def test_assemble_rejects_overlapping_stops():
    stops = [stop("a", time(9), 90, FENWAY), stop("b", time(10), 30, KENMORE)]

    with pytest.raises(ScheduleConflict):
        assemble(stops, [leg("a", "b")])
