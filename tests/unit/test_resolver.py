"""Tests for venue resolution."""

import pytest

from conftest import FENWAY_PARK, TATTE_BACK_BAY, FakePlaces, failing_tool, make_settings
from dayplanner.exec import DictToolRegistry, ToolExecutor
from dayplanner.models import ActivityRequest, PlaceCandidate, ResolvedVenue, Unresolved
from dayplanner.planning import VenueResolver


@pytest.fixture
def resolver(normalizer, executor, settings) -> VenueResolver:
    return VenueResolver(normalizer, executor, settings)


def request(description: str, location_hint: str | None = None, rank: int = 0) -> ActivityRequest:
    return ActivityRequest(description=description, location_hint=location_hint, rank=rank)


def test_plan_search_for_category_in_known_area(resolver):
    plan = resolver.plan_search(request("coffee", "back bay"))

    assert plan.query == "coffee in Back Bay, Boston, MA"
    assert plan.place_type == "cafe"
    assert plan.location == "Back Bay"


def test_plan_search_for_named_place(resolver):
    plan = resolver.plan_search(request("Lunch", "Fenway Park"))

    assert plan.query == "Fenway Park, Boston, MA"
    assert plan.place_type is None
    assert plan.location == "Fenway Park"


def test_plan_search_without_location(resolver):
    plan = resolver.plan_search(request("museum"))

    assert plan.query == "museum, Boston, MA"
    assert plan.place_type == "museum"
    assert plan.location is None


def test_plan_search_for_non_venue_activity(resolver):
    assert resolver.plan_search(request("walk around")) is None


def test_confidence_weights(resolver):
    candidate = PlaceCandidate.model_validate(FENWAY_PARK)

    verified = resolver.confidence(candidate, "Fenway Park", "stadium")
    unverified = resolver.confidence(candidate, "Back Bay", "stadium")

    assert verified == pytest.approx(0.7 + 0.2 + 0.1 * 4.7 / 5)
    assert unverified == pytest.approx(0.2 + 0.1 * 4.7 / 5)


def test_resolves_named_place(resolver, ctx):
    venue = resolver.resolve(request("Lunch", "Fenway Park"), ctx)

    assert isinstance(venue, ResolvedVenue)
    assert venue.name == "Fenway Park"
    assert venue.area == "Fenway"
    assert venue.confidence >= 0.5


def test_resolves_category_in_area(resolver, ctx):
    venue = resolver.resolve(request("coffee", "Back Bay"), ctx)

    assert isinstance(venue, ResolvedVenue)
    assert venue.name == "Tatte Bakery & Cafe"
    assert venue.area == "Back Bay"


def test_unmatched_location_is_unresolved_with_suggestions(resolver, ctx):
    outcome = resolver.resolve(request("dinner", "Fenway Stadium"), ctx)

    assert isinstance(outcome, Unresolved)
    assert outcome.kind == "unresolvable_location"
    assert "Fenway" in outcome.suggestions
    assert "Fenway Stadium" in outcome.reason


def test_candidate_in_wrong_area_is_rejected(normalizer, settings, ctx):
    places = FakePlaces({"seaport": [FENWAY_PARK]})
    executor = ToolExecutor(DictToolRegistry({"places": places}), settings)
    try:
        outcome = VenueResolver(normalizer, executor, settings).resolve(
            request("museum", "Seaport"), ctx
        )
    finally:
        executor.shutdown()

    assert isinstance(outcome, Unresolved)


def test_provider_failure_is_reported(normalizer, settings, ctx):
    executor = ToolExecutor(DictToolRegistry({"places": failing_tool("places")}), settings)
    try:
        outcome = VenueResolver(normalizer, executor, settings).resolve(
            request("Lunch", "Fenway Park"), ctx
        )
    finally:
        executor.shutdown()

    assert isinstance(outcome, Unresolved)
    assert outcome.kind == "external_provider_failure"
    assert "REQUEST_DENIED" not in outcome.reason


def test_resolve_all_keeps_order(resolver, ctx):
    requests = [
        request("Lunch", "Fenway Park", rank=0),
        request("dinner", "Atlantis", rank=1),
        request("coffee", "Back Bay", rank=2),
    ]

    outcomes = resolver.resolve_all(requests, ctx)

    assert [type(o).__name__ for o in outcomes] == ["ResolvedVenue", "Unresolved", "ResolvedVenue"]
    assert outcomes[1].request.description == "dinner"


def test_plan_search_uses_venue_preference(resolver):
    plan = resolver.plan_search(
        ActivityRequest(
            description="lunch",
            location_hint="back bay",
            search_preference="sandwich place",
            rank=0,
        )
    )

    assert plan.query == "sandwich place in Back Bay, Boston, MA"
    assert plan.place_type == "restaurant"


THINKING_CUP = {
    "place_id": "place-thinking-cup",
    "name": "Thinking Cup",
    "formatted_address": "85 Newbury St, Back Bay, Boston, MA 02116",
    "types": ["cafe", "food"],
    "rating": 4.3,
}

SEAPORT_CAFE = {
    "place_id": "place-seaport-cafe",
    "name": "Harbor Coffee",
    "formatted_address": "1 Seaport Blvd, Boston, MA 02210",
    "types": ["cafe"],
    "rating": 4.9,
}


@pytest.mark.parametrize(("max_alternatives", "expected"), [(3, ["Thinking Cup"]), (0, [])])
def test_keeps_verified_runners_up_as_alternatives(max_alternatives, expected, normalizer, ctx):
    settings = make_settings(max_alternatives=max_alternatives)
    places = FakePlaces({"back bay": [THINKING_CUP, SEAPORT_CAFE, TATTE_BACK_BAY]})
    executor = ToolExecutor(DictToolRegistry({"places": places}), settings)
    try:
        venue = VenueResolver(normalizer, executor, settings).resolve(
            request("coffee", "Back Bay"), ctx
        )
    finally:
        executor.shutdown()

    assert venue.name == "Tatte Bakery & Cafe"
    assert [alt.name for alt in venue.alternatives] == expected
    assert all(alt.area == "Back Bay" and not alt.alternatives for alt in venue.alternatives)
