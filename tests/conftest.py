"""Pytest configuration and fixtures for testing."""

import random
import threading
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from dayplanner.config import Settings
from dayplanner.errors import PermanentProviderError
from dayplanner.exec import DictToolRegistry, InMemoryCache, RunContext, ToolExecutor
from dayplanner.knowledge import load_default_knowledge_base
from dayplanner.normalize import LocationNormalizer
from dayplanner.planning import DayPlanner

FENWAY_PARK = {
    "place_id": "place-fenway-park",
    "name": "Fenway Park",
    "formatted_address": "4 Jersey St, Boston, MA 02215",
    "types": ["stadium", "point_of_interest"],
    "rating": 4.7,
    "location": {"lat": 42.3467, "lon": -71.0972},
}

TATTE_BACK_BAY = {
    "place_id": "place-tatte-back-bay",
    "name": "Tatte Bakery & Cafe",
    "formatted_address": "399 Boylston St, Back Bay, Boston, MA 02116",
    "types": ["cafe", "bakery", "food"],
    "rating": 4.5,
    "location": {"lat": 42.3522, "lon": -71.0712},
}

JFK_LIBRARY = {
    "place_id": "place-jfk-library",
    "name": "John F. Kennedy Presidential Library and Museum",
    "formatted_address": "Columbia Point, Dorchester, Boston, MA 02125",
    "types": ["library", "museum", "tourist_attraction"],
    "rating": 4.7,
    "location": {"lat": 42.3162, "lon": -71.0341},
}

# Query substring (case-insensitive) -> canned search results; first hit wins
DEFAULT_PLACES: dict[str, list[dict[str, Any]]] = {
    "fenway park": [FENWAY_PARK],
    "back bay": [TATTE_BACK_BAY],
    "jfk library": [JFK_LIBRARY],
}

FORECAST_START = datetime(2024, 6, 1, tzinfo=UTC)


def forecast(main: str, temp: float, wind_ms: float, pop: float) -> list[dict[str, Any]]:
    """Five days of 3-hourly entries from 2024-06-01, all alike."""
    return [
        {
            "dt": int((FORECAST_START + timedelta(hours=3 * i)).timestamp()),
            "main": main,
            "temp": temp,
            "wind_ms": wind_ms,
            "pop": pop,
        }
        for i in range(40)
    ]


CLEAR_FORECAST = forecast("Clear", 22.0, 3.0, 0.05)

RAINY_FORECAST = forecast("Rain", 14.0, 6.0, 0.9)


class FakePlaces:
    """Places tool answering from canned results keyed by query substring."""

    def __init__(self, results: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self.results = DEFAULT_PLACES if results is None else results
        self.calls: list[dict[str, Any]] = []
        self._lock = threading.Lock()

    def __call__(self, args: dict[str, Any]) -> dict[str, Any]:
        with self._lock:
            self.calls.append(dict(args))
        query = args["query"].lower()
        for key, items in self.results.items():
            if key in query:
                return {"results": items}
        return {"results": []}


class FakeDirections:
    """Directions tool returning a fixed duration for every pair."""

    def __init__(self, minutes: int = 12) -> None:
        self.minutes = minutes
        self.calls: list[dict[str, Any]] = []

    def __call__(self, args: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(dict(args))
        return {"duration_minutes": self.minutes, "mode": args["mode"]}


class FakeWeather:
    """Weather tool returning a fixed forecast."""

    def __init__(self, entries: list[dict[str, Any]] | None = None) -> None:
        self.entries = CLEAR_FORECAST if entries is None else entries
        self.calls: list[dict[str, Any]] = []

    def __call__(self, args: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(dict(args))
        return {"entries": self.entries}


def failing_tool(kind: str):
    """A tool that always fails permanently."""

    def tool(args: dict[str, Any]) -> dict[str, Any]:
        raise PermanentProviderError(kind, "REQUEST_DENIED")

    return tool


def make_settings(**overrides: Any) -> Settings:
    """Settings isolated from the environment and any .env file."""
    values: dict[str, Any] = {
        "google_maps_api_key": "test-google-key",
        "weather_api_key": "test-weather-key",
        "openai_api_key": "dummy-openai-api-key-for-tests",
        "retry_jitter_min_ms": 1,
        "retry_jitter_max_ms": 2,
        "plan_deadline_s": 30.0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    """Test settings with fast retries and no language model."""
    return make_settings()


@pytest.fixture
def kb():
    """The built-in Boston knowledge base."""
    return load_default_knowledge_base()


@pytest.fixture
def normalizer(kb) -> LocationNormalizer:
    """Location normalizer over the built-in knowledge base."""
    return LocationNormalizer(kb)


@pytest.fixture
def places() -> FakePlaces:
    return FakePlaces()


@pytest.fixture
def directions() -> FakeDirections:
    return FakeDirections()


@pytest.fixture
def weather() -> FakeWeather:
    return FakeWeather()


@pytest.fixture
def registry(places, directions, weather) -> DictToolRegistry:
    """Registry wired to the fake providers."""
    return DictToolRegistry({"places": places, "directions": directions, "weather": weather})


@pytest.fixture
def executor(registry, settings):
    """Executor over the fake providers with a fresh cache."""
    executor = ToolExecutor(registry, settings, cache=InMemoryCache(), rng=random.Random(0))
    yield executor
    executor.shutdown()


@pytest.fixture
def ctx() -> RunContext:
    """A run context with a generous deadline."""
    return RunContext("test-run", deadline_s=30.0)


@pytest.fixture
def planner(executor, settings, kb) -> DayPlanner:
    """Planner wired to the fake providers."""
    return DayPlanner(executor, settings, kb=kb)
