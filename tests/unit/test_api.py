"""Tests for the HTTP surface."""

import pytest
from fastapi.testclient import TestClient

from dayplanner.api.plan import get_planner
from dayplanner.errors import PlanAborted
from dayplanner.exec import RunContext
from dayplanner.main import create_app

SCENARIO = {
    "date": "2024-06-01",
    "startTime": "09:00",
    "freeTextPlans": "Lunch at Fenway Park at 1pm, then coffee in Back Bay",
    "userId": "user-42",
}


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app, planner):
    app.dependency_overrides[get_planner] = lambda: planner
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


def test_plan_returns_camel_case_itinerary(client):
    response = client.post("/plan", json=SCENARIO)

    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"id", "userId", "createdAt", "places", "travelTimes", "unresolved"}
    assert data["userId"] == "user-42"
    names = [place["name"] for place in data["places"]]
    assert "Fenway Park" in names
    assert "Tatte Bakery & Cafe" in names
    assert len(data["travelTimes"]) == len(data["places"]) - 1
    lunch = next(p for p in data["places"] if p["name"] == "Fenway Park")
    assert lunch["displayTime"] == "1:00 PM"
    assert lunch["kind"] == "user_requested"
    assert lunch["alternatives"] == []


def test_blank_plan_is_unprocessable(client):
    response = client.post("/plan", json={**SCENARIO, "freeTextPlans": "   "})

    assert response.status_code == 422
    assert "activit" in response.json()["detail"].lower()


def test_oversized_plan_is_rejected(client):
    response = client.post("/plan", json={**SCENARIO, "freeTextPlans": "coffee " * 400})

    assert response.status_code == 422


def test_missing_fields_are_rejected(client):
    response = client.post("/plan", json={"freeTextPlans": "coffee"})

    assert response.status_code == 422


class SlowPlanner:
    def new_context(self, run_id: str) -> RunContext:
        return RunContext(run_id)

    def plan(self, request, ctx):
        raise PlanAborted("deadline")


def test_overrunning_plan_times_out(app):
    app.dependency_overrides[get_planner] = SlowPlanner
    with TestClient(app) as client:
        response = client.post("/plan", json=SCENARIO)

    assert response.status_code == 504
    assert response.json()["detail"] == PlanAborted.user_message


def test_healthz(app):
    with TestClient(app) as client:
        response = client.get("/healthz")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] in ("ok", "degraded")
    assert set(data["checks"]) == {"places", "directions", "weather", "extractor"}
    assert data["areas"] == 15
