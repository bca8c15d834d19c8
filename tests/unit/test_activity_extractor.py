"""Tests for activity extraction (rules and language model)."""

import json
from datetime import time
from types import SimpleNamespace
from typing import Any

import httpx
import openai
import pytest

from conftest import make_settings
from dayplanner.errors import PermanentProviderError, TransientProviderError
from dayplanner.exec import DictToolRegistry, ToolExecutor
from dayplanner.models import ActivityRequest
from dayplanner.nlp import ActivityExtractor, OpenAIActivityExtractor, RuleBasedActivityExtractor
from dayplanner.nlp.activity_extractor import to_requests


@pytest.fixture
def rules() -> RuleBasedActivityExtractor:
    return RuleBasedActivityExtractor()


def test_rules_split_sequenced_activities(rules):
    items = rules.extract_raw("Lunch at Fenway Park at 1pm, then coffee in Back Bay")

    assert items == [
        {
            "description": "Lunch",
            "location_hint": "Fenway Park",
            "time_hint": "1pm",
            "venue_preference": None,
        },
        {
            "description": "coffee",
            "location_hint": "Back Bay",
            "time_hint": None,
            "venue_preference": None,
        },
    ]


def test_rules_handle_semicolons_and_sentences(rules):
    text = "Breakfast in the North End at 9am; drinks near Faneuil Hall around 9. Bed."

    items = rules.extract_raw(text)

    assert [item["description"] for item in items] == ["Breakfast", "drinks", "Bed"]
    assert items[0]["location_hint"] == "North End"
    assert items[1]["location_hint"] == "Faneuil Hall"
    assert items[1]["time_hint"] == "around 9"


def test_rules_do_not_split_on_abbreviations(rules):
    items = rules.extract_raw("Shopping at Newbury St. and lunch at 1 p.m.")

    assert len(items) == 1
    assert items[0]["location_hint"] == "Newbury St"
    assert items[0]["time_hint"] == "1 p.m."


def test_rules_pick_up_venue_preference(rules):
    text = "Lunch at a sandwich place in Back Bay at 1pm, then drinks at a rooftop bar"

    items = rules.extract_raw(text)

    assert items[0] == {
        "description": "Lunch",
        "location_hint": "Back Bay",
        "time_hint": "1pm",
        "venue_preference": "sandwich place",
    }
    assert items[1]["description"] == "drinks"
    assert items[1]["venue_preference"] == "rooftop bar"


def test_activity_request_accepts_explicit_time():
    request = ActivityRequest(description="Lunch", time=time(13, 0), rank=0)

    assert request.time == time(13, 0)
    assert ActivityRequest.model_validate(request.model_dump()).time == time(13, 0)


def test_to_requests_ranks_and_parses_times():
    requests = to_requests(
        [
            {"description": "Lunch", "location_hint": "Fenway Park", "time_hint": "1pm"},
            {"description": "  ", "location_hint": "Nowhere"},
            {"description": "drinks", "time_hint": "around 9"},
        ]
    )

    assert [r.rank for r in requests] == [0, 1]
    assert requests[0].time == time(13, 0)
    assert requests[1].time == time(21, 0)
    assert requests[1].location_hint is None
    assert requests[0].search_preference is None


def test_to_requests_carries_venue_preference():
    requests = to_requests(
        [
            {
                "description": "lunch",
                "location_hint": "Back Bay",
                "venue_preference": " sandwich place ",
            }
        ]
    )

    assert requests[0].search_preference == "sandwich place"


def test_extractor_uses_rules_without_key(executor, settings, ctx):
    extractor = ActivityExtractor(executor, settings)

    requests = extractor.extract("Lunch at Fenway Park at 1pm, then coffee in Back Bay", ctx)

    assert extractor.uses_llm is False
    assert [r.description for r in requests] == ["Lunch", "coffee"]
    assert requests[0].time == time(13, 0)


def test_extractor_returns_nothing_for_blank_text(executor, settings, ctx):
    assert ActivityExtractor(executor, settings).extract("   ", ctx) == []


def make_llm_executor(tool) -> tuple[ToolExecutor, Any]:
    settings = make_settings(openai_api_key="sk-test-key")
    return ToolExecutor(DictToolRegistry({"extractor": tool}), settings), settings


def test_extractor_uses_language_model_when_configured(ctx):
    def llm(args: dict[str, Any]) -> dict[str, Any]:
        return {
            "activities": [
                {"description": "Red Sox game", "location_hint": "Fenway Park", "time_hint": "7pm"}
            ]
        }

    executor, settings = make_llm_executor(llm)
    try:
        extractor = ActivityExtractor(executor, settings)
        requests = extractor.extract("Catch the Sox tonight at 7", ctx)
    finally:
        executor.shutdown()

    assert extractor.uses_llm is True
    assert requests[0].description == "Red Sox game"
    assert requests[0].time == time(19, 0)


def test_extractor_falls_back_to_rules_on_model_failure(ctx):
    def llm(args: dict[str, Any]) -> dict[str, Any]:
        raise PermanentProviderError("extractor", "AuthenticationError")

    executor, settings = make_llm_executor(llm)
    try:
        requests = ActivityExtractor(executor, settings).extract("Coffee in Back Bay", ctx)
    finally:
        executor.shutdown()

    assert [(r.description, r.location_hint) for r in requests] == [("Coffee", "Back Bay")]


class FakeCompletions:
    def __init__(self, result: Any = None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.kwargs: dict[str, Any] = {}

    def create(self, **kwargs: Any) -> Any:
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        return self.result


def fake_client(completions: FakeCompletions) -> Any:
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def completion_with_arguments(arguments: str) -> Any:
    call = SimpleNamespace(function=SimpleNamespace(name="extract_activities", arguments=arguments))
    message = SimpleNamespace(tool_calls=[call], content=None)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def test_openai_extractor_parses_tool_call():
    payload = {"activities": [{"description": "lunch", "location_hint": "North End"}, "junk"]}
    completions = FakeCompletions(result=completion_with_arguments(json.dumps(payload)))
    extractor = OpenAIActivityExtractor(make_settings(), client=fake_client(completions))

    data = extractor({"text": "lunch in the North End"})

    assert data == {"activities": [{"description": "lunch", "location_hint": "North End"}]}
    assert completions.kwargs["tool_choice"]["function"]["name"] == "extract_activities"
    assert completions.kwargs["temperature"] == 0


def test_openai_extractor_rejects_malformed_arguments():
    completions = FakeCompletions(result=completion_with_arguments("{not json"))
    extractor = OpenAIActivityExtractor(make_settings(), client=fake_client(completions))

    with pytest.raises(PermanentProviderError):
        extractor({"text": "lunch"})


def test_openai_connection_errors_are_transient():
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    completions = FakeCompletions(error=openai.APIConnectionError(request=request))
    extractor = OpenAIActivityExtractor(make_settings(), client=fake_client(completions))

    with pytest.raises(TransientProviderError):
        extractor({"text": "lunch"})
