"""Parse loose time expressions ("1pm", "around 3", "dinner") into clock times."""

from __future__ import annotations

import re
from datetime import time

_MERIDIAN_RE = re.compile(r"\b(\d{1,2})(?::(\d{2}))?\s*(a\.?m\.?|p\.?m\.?)(?![a-z])", re.I)
_CLOCK_RE = re.compile(r"\b([01]?\d|2[0-3]):([0-5]\d)\b")
_AROUND_RE = re.compile(r"\b(?:around|about|at|by|from)\s+(\d{1,2})(?::([0-5]\d))?\b", re.I)

# Checked in order; first word hit wins
_PERIODS: tuple[tuple[tuple[str, ...], time], ...] = (
    (("noon", "midday", "lunch", "lunchtime"), time(12, 0)),
    (("morning", "breakfast", "dawn", "early"), time(9, 0)),
    (("afternoon", "tea"), time(15, 0)),
    (("evening", "dinner", "sunset", "supper"), time(18, 0)),
    (("night", "tonight", "late", "drinks", "nightcap"), time(21, 0)),
)

_EVENING_CONTEXT = ("dinner", "evening", "night", "drinks", "supper", "tonight")
_MORNING_CONTEXT = ("breakfast", "coffee", "morning", "early", "brunch")

# Words that name a period; used by extractors to spot a time phrase
PERIOD_WORDS = frozenset(
    {"noon", "midday", "morning", "afternoon", "evening", "night", "tonight", "lunchtime"}
)


def _words(text: str) -> set[str]:
    return set(re.findall(r"[a-z]+", text.lower()))


def _to_24h(hour: int, minute: int, meridian: str) -> time | None:
    if not 1 <= hour <= 12 or minute > 59:
        return None
    is_pm = meridian.lower().startswith("p")
    if hour == 12:
        hour = 12 if is_pm else 0
    elif is_pm:
        hour += 12
    return time(hour, minute)


def _bare_hour(hour: int, minute: int, words: set[str]) -> time | None:
    """Resolve an hour without am/pm from context.

    Breakfast/coffee context keeps the morning reading; evening context
    moves 5-11 into the evening; otherwise 1-6 read as afternoon and
    7-11 as morning.
    """
    if hour > 23 or minute > 59:
        return None
    if hour == 0 or hour >= 12:
        return time(hour, minute)
    if words & set(_EVENING_CONTEXT) and hour >= 5:
        return time(hour + 12, minute)
    if words & set(_MORNING_CONTEXT):
        return time(hour, minute)
    if hour <= 6:
        return time(hour + 12, minute)
    return time(hour, minute)


_PERIOD_RE = re.compile(r"\b(?:in the |at |around |by )?(" + "|".join(sorted(PERIOD_WORDS)) + r")\b", re.I)


def find_time_expression(text: str) -> str | None:
    """The first explicit clock or period phrase in ``text``, verbatim."""
    for pattern in (_MERIDIAN_RE, _CLOCK_RE, _AROUND_RE, _PERIOD_RE):
        match = pattern.search(text)
        if match:
            return match.group(0)
    return None


def parse_time_hint(text: str | None, context: str | None = None) -> time | None:
    """Best clock time for a hint, or None when it names no time.

    Tries, in order: "1pm"/"10:30 a.m.", "13:00", "around 3"/"at 7", then
    period words such as "noon", "morning" or "dinner". ``context`` (usually
    the activity description) only disambiguates bare hours.
    """
    if not text or not text.strip():
        return None

    match = _MERIDIAN_RE.search(text)
    if match:
        hour, minute, meridian = match.groups()
        return _to_24h(int(hour), int(minute or 0), meridian)

    match = _CLOCK_RE.search(text)
    if match:
        return time(int(match.group(1)), int(match.group(2)))

    words = _words(text)
    match = _AROUND_RE.search(text)
    if match:
        context_words = words | _words(context or "")
        return _bare_hour(int(match.group(1)), int(match.group(2) or 0), context_words)

    for terms, value in _PERIODS:
        if words & set(terms):
            return value
    return None
