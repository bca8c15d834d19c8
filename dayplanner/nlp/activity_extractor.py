"""Turn a free-text day description into ordered activity requests."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

import openai
from openai import OpenAI

from dayplanner.config import Settings, get_openai_api_key, has_real_key
from dayplanner.errors import (
    ExternalProviderFailure,
    PermanentProviderError,
    TransientProviderError,
)
from dayplanner.exec.context import RunContext
from dayplanner.exec.executor import ToolExecutor
from dayplanner.exec.types import ToolRequest
from dayplanner.models.activity import ActivityRequest
from dayplanner.nlp.time_parser import find_time_expression, parse_time_hint

logger = logging.getLogger(__name__)


# OpenAI tool schema for activity extraction
EXTRACT_ACTIVITIES_FUNCTION = {
    "name": "extract_activities",
    "description": "List the activities the user wants to do today, in the order they describe them",
    "parameters": {
        "type": "object",
        "properties": {
            "activities": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "description": {
                            "type": "string",
                            "description": "Short activity, e.g. 'lunch', 'coffee', 'Red Sox game'",
                        },
                        "location_hint": {
                            "type": "string",
                            "description": "Place or neighborhood as the user wrote it, e.g. 'Fenway Park'",
                        },
                        "time_hint": {
                            "type": "string",
                            "description": "Time as the user wrote it, e.g. '1pm', 'around 3', 'dinner'",
                        },
                        "venue_preference": {
                            "type": "string",
                            "description": "Kind of venue, e.g. 'sandwich place', 'rooftop bar'",
                        },
                    },
                    "required": ["description"],
                },
            }
        },
        "required": ["activities"],
    },
}


SYSTEM_PROMPT = """You extract a day plan from a user's description of what they want to do in {metro}.

Guidelines:
- One entry per distinct activity, in the order the user mentions them
- Keep the user's own words for places and times; do not invent either
- Leave location_hint, time_hint or venue_preference out when the user gives none
- Ignore chit-chat that is not an activity
"""


class OpenAIActivityExtractor:
    """Language-model extraction via OpenAI function calling.

    Used as the ``extractor`` tool: ``extractor({"text": ...})`` returns
    ``{"activities": [{"description", "location_hint", "time_hint",
    "venue_preference"}, ...]}``.
    """

    def __init__(self, settings: Settings, client: OpenAI | None = None) -> None:
        self.settings = settings
        self._client = client

    def _get_client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(
                api_key=get_openai_api_key(self.settings),
                timeout=self.settings.extractor_timeout_s,
                max_retries=0,
            )
        return self._client

    def __call__(self, args: dict[str, Any]) -> dict[str, Any]:
        client = self._get_client()
        try:
            response = client.chat.completions.create(
                model=self.settings.openai_model,
                messages=[
                    {
                        "role": "system",
                        "content": SYSTEM_PROMPT.format(metro=self.settings.metro_name),
                    },
                    {"role": "user", "content": args["text"]},
                ],
                tools=[{"type": "function", "function": EXTRACT_ACTIVITIES_FUNCTION}],
                tool_choice={"type": "function", "function": {"name": "extract_activities"}},
                temperature=0,
            )
        except (
            openai.APITimeoutError,
            openai.APIConnectionError,
            openai.RateLimitError,
            openai.InternalServerError,
        ) as e:
            raise TransientProviderError("extractor", type(e).__name__) from e
        except openai.OpenAIError as e:
            raise PermanentProviderError("extractor", type(e).__name__) from e

        message = response.choices[0].message
        if not message.tool_calls:
            return {"activities": []}
        try:
            payload = json.loads(message.tool_calls[0].function.arguments)
        except json.JSONDecodeError as e:
            raise PermanentProviderError("extractor", "malformed tool arguments") from e
        activities = payload.get("activities") or []
        return {"activities": [item for item in activities if isinstance(item, dict)]}


# Sequencing separators between activities
_SPLIT_RE = re.compile(
    r",?\s*\b(?:and\s+)?then\b|;|\bafterwards?\b|(?<![ap]\.m)(?<!\bSt)(?<!\bAve)\.(?=\s|$)",
    re.I,
)
_LEADING_FILLER_RE = re.compile(
    r"^(?:then|and|after that|afterwards|finally|first|next|later)\b[\s,]*", re.I
)
_LOCATION_RE = re.compile(
    r"\b(?:[Aa]t|[Ii]n|[Nn]ear|[Aa]round)\s+(?:the\s+)?"
    r"([A-Z][\w'&/-]*(?:\s+(?:of\s+|the\s+|on\s+)?[A-Z][\w'&/-]*)*)"
)
_PREFERENCE_RE = re.compile(
    r"\b(?:at|to|in|from)\s+(?:a|an|some)\s+"
    r"((?:[\w'-]+\s+){0,3}?"
    r"(?:place|spot|shop|joint|bar|pub|restaurant|cafe|café|bakery|diner|truck))\b",
    re.I,
)
_DANGLING_RE = re.compile(r"(?:\s+\b(?:at|in|near|around|by|from|the|a)\b)+\s*$", re.I)


class RuleBasedActivityExtractor:
    """Deterministic extraction used when the language model is unavailable.

    Splits on sequencing words, takes the first ``at|in|near <Capitalized
    Words>`` phrase as the location hint, an ``at a <kind of> place`` phrase
    as the venue preference, and the first clock or period phrase as the
    time hint.
    """

    def extract_raw(self, text: str) -> list[dict[str, str | None]]:
        items: list[dict[str, str | None]] = []
        for clause in _SPLIT_RE.split(text):
            clause = _LEADING_FILLER_RE.sub("", clause.strip(" ,")).strip()
            if not clause:
                continue

            time_hint = find_time_expression(clause)
            remainder = clause.replace(time_hint, " ", 1) if time_hint else clause

            location_hint = None
            match = _LOCATION_RE.search(remainder)
            if match:
                location_hint = match.group(1).strip(" .,")
                remainder = remainder[: match.start()] + " " + remainder[match.end() :]

            preference = None
            match = _PREFERENCE_RE.search(remainder)
            if match:
                preference = " ".join(match.group(1).lower().split())
                remainder = remainder[: match.start()] + " " + remainder[match.end() :]

            description = _DANGLING_RE.sub("", " ".join(remainder.split())).strip(" ,.")
            if not description:
                description = location_hint or clause
            items.append(
                {
                    "description": description,
                    "location_hint": location_hint,
                    "time_hint": time_hint,
                    "venue_preference": preference,
                }
            )
        return items


def to_requests(items: list[dict[str, Any]]) -> list[ActivityRequest]:
    """Build ranked requests, dropping items without a description."""
    requests: list[ActivityRequest] = []
    for item in items:
        description = (item.get("description") or "").strip()
        if not description:
            continue
        hint = (item.get("location_hint") or "").strip() or None
        preference = (item.get("venue_preference") or "").strip() or None
        requests.append(
            ActivityRequest(
                description=description,
                time=parse_time_hint(item.get("time_hint"), context=description),
                location_hint=hint,
                search_preference=preference,
                rank=len(requests),
            )
        )
    return requests


class ActivityExtractor:
    """Extract activities through the ``extractor`` tool, falling back to rules.

    The language model is used when an OpenAI key is configured and an
    ``extractor`` tool is registered; any failure falls back to
    ``RuleBasedActivityExtractor``.
    """

    def __init__(
        self,
        executor: ToolExecutor,
        settings: Settings,
        fallback: RuleBasedActivityExtractor | None = None,
    ) -> None:
        self.executor = executor
        self.settings = settings
        self.fallback = fallback or RuleBasedActivityExtractor()

    @property
    def uses_llm(self) -> bool:
        return has_real_key(self.settings.openai_api_key) and "extractor" in self.executor.registry

    def extract(self, text: str, ctx: RunContext) -> list[ActivityRequest]:
        if not text or not text.strip():
            return []
        if self.uses_llm:
            timeout_ms = int(self.settings.extractor_timeout_s * 1000)
            try:
                data = self.executor.execute_or_raise(
                    ToolRequest(
                        name="extractor",
                        args={"text": text},
                        timeout_soft_ms=timeout_ms,
                        timeout_hard_ms=timeout_ms,
                    ),
                    ctx,
                )
                requests = to_requests(data.get("activities", []))
                logger.info(f"Extracted {len(requests)} activities with the language model")
                return requests
            except ExternalProviderFailure as e:
                logger.warning(f"Language-model extraction failed, using rules: {e}")
        requests = to_requests(self.fallback.extract_raw(text))
        logger.info(f"Extracted {len(requests)} activities with rules")
        return requests
