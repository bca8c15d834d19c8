"""Matcher strategies tried in order by the location normalizer.

Each matcher receives cleaned (lower-cased, trimmed) text and returns a
canonical name or None to pass to the next matcher.
"""

from __future__ import annotations

from typing import Protocol

from dayplanner.knowledge.base import AreaKnowledgeBase

from .aliases import alias_index
from .text import title_case, tokenize

MIN_OVERLAP_SCORE = 0.65


class LocationMatcher(Protocol):
    """Protocol for a single normalization strategy."""

    def match(self, text: str) -> str | None: ...


class AliasMatcher:
    """Colloquial names such as "kenmore" or "little italy"."""

    def __init__(self, aliases: dict[str, str] | None = None) -> None:
        self._aliases = aliases if aliases is not None else alias_index()

    def match(self, text: str) -> str | None:
        return self._aliases.get(text)


class ExactMatcher:
    """Case-insensitive match against the knowledge base's area names."""

    def __init__(self, kb: AreaKnowledgeBase) -> None:
        self._kb = kb

    def match(self, text: str) -> str | None:
        area = self._kb.get(text)
        return area.name if area else None


class OverlapMatcher:
    """Best area by shared token characters.

    Score is the number of characters in tokens shared with the area name,
    divided by the larger of the two token lengths. Ties keep dataset order.
    """

    def __init__(self, kb: AreaKnowledgeBase, min_score: float = MIN_OVERLAP_SCORE) -> None:
        self._min_score = min_score
        self._area_tokens = [(area.name, set(tokenize(area.name))) for area in kb]

    def match(self, text: str) -> str | None:
        tokens = set(tokenize(text))
        if not tokens:
            return None
        best_name, best_score = None, 0.0
        for name, area_tokens in self._area_tokens:
            score = _overlap_score(tokens, area_tokens)
            if score > best_score:
                best_name, best_score = name, score
        if best_score >= self._min_score:
            return best_name
        return None


class PassThroughMatcher:
    """Unknown locations come back title-cased rather than failing."""

    def match(self, text: str) -> str | None:
        return title_case(text)


def _overlap_score(tokens: set[str], area_tokens: set[str]) -> float:
    shared = sum(len(token) for token in tokens & area_tokens)
    total = max(sum(len(t) for t in tokens), sum(len(t) for t in area_tokens))
    return shared / total if total else 0.0


def default_matchers(kb: AreaKnowledgeBase) -> list[LocationMatcher]:
    return [AliasMatcher(), ExactMatcher(kb), OverlapMatcher(kb), PassThroughMatcher()]
