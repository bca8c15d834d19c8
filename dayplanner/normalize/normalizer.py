"""Reconcile free-text locations with the area knowledge base."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from dayplanner.knowledge.base import AreaKnowledgeBase

from .aliases import AREA_ALIASES, SPELLING_CORRECTIONS, alias_index
from .matchers import LocationMatcher, default_matchers
from .text import clean, title_case, token_matches, tokenize

logger = logging.getLogger(__name__)

# Venue types that may stand in for the neighborhood they are in
LANDMARK_TYPES = frozenset(
    {
        "lodging",
        "stadium",
        "tourist_attraction",
        "museum",
        "university",
        "church",
        "library",
        "landmark",
    }
)

MAX_SUGGESTIONS = 5
MAX_SETTLE_PASSES = 3

# Words too generic to drive suggestions on their own
_GENERIC_WORDS = frozenset(
    "the a of and in at near area square street st sq district boston ma center".split()
)


class LocationNormalizer:
    """Canonicalize, verify and suggest locations against known areas.

    ``normalize`` runs the configured matchers in order (aliases, exact area
    names, token overlap, then pass-through) after applying spelling
    corrections. It never fails: unknown places come back title-cased.
    """

    def __init__(
        self,
        kb: AreaKnowledgeBase,
        matchers: Sequence[LocationMatcher] | None = None,
        corrections: dict[str, str] | None = None,
    ) -> None:
        self._kb = kb
        self._matchers = list(matchers) if matchers is not None else default_matchers(kb)
        self._corrections = corrections if corrections is not None else SPELLING_CORRECTIONS
        self._aliases = alias_index()

    @property
    def knowledge_base(self) -> AreaKnowledgeBase:
        return self._kb

    def normalize(self, text: str | None) -> str:
        result = self._canonical(text)
        # Case mappings do not always round-trip (e.g. dotless i), so settle
        # on a value that maps to itself
        for _ in range(MAX_SETTLE_PASSES):
            again = self._canonical(result)
            if again == result:
                break
            result = again
        if result != text:
            logger.debug(f"Normalized location: {text!r} -> {result!r}")
        return result

    def _canonical(self, text: str | None) -> str:
        cleaned = clean(text)
        if not cleaned:
            return ""
        corrected = clean(self._corrections.get(cleaned, cleaned))
        for matcher in self._matchers:
            result = matcher.match(corrected)
            if result:
                return result
        return title_case(corrected)

    def location_overlap(self, requested: str, candidate_text: str) -> float:
        """Fraction of the requested location's tokens found in the candidate."""
        requested_tokens = tokenize(self.normalize(requested))
        if not requested_tokens:
            return 0.0
        candidate_tokens = set(tokenize(candidate_text))
        hits = sum(1 for token in requested_tokens if token_matches(token, candidate_tokens))
        return hits / len(requested_tokens)

    def verify(
        self,
        requested_location: str,
        candidate_address: str,
        candidate_types: Iterable[str] = (),
    ) -> bool:
        """Whether a search result plausibly sits at the requested location.

        Accepts when every requested token appears (allowing one typo) in the
        candidate's name or address, when the candidate carries a colloquial
        name of the requested area, or when a landmark-type candidate names
        the area or one of its popular attractions.
        """
        normalized = self.normalize(requested_location)
        candidate_text = clean(candidate_address)
        if not normalized or not candidate_text:
            return False
        candidate_tokens = set(tokenize(candidate_text))

        for form in (normalized, requested_location):
            tokens = tokenize(form)
            if tokens and all(token_matches(token, candidate_tokens) for token in tokens):
                return True

        area = self._kb.get(normalized)
        if area is not None:
            for alias in AREA_ALIASES.get(area.name, ()):
                alias_tokens = set(tokenize(alias))
                if alias_tokens and alias_tokens <= candidate_tokens:
                    return True

        if LANDMARK_TYPES.isdisjoint(candidate_types):
            return False
        # Whole-word matches on proper names only; generic tags such as
        # "museums" or "shopping" say nothing about where a venue is
        markers = [normalized] if area is None else [area.name, *area.attractions]
        for marker in markers:
            marker_tokens = set(tokenize(marker))
            if marker_tokens and marker_tokens <= candidate_tokens:
                return True
        return False

    def infer_area(self, text: str | None) -> str | None:
        """Area whose name or colloquial name appears in ``text``, if any."""
        tokens = set(tokenize(clean(text)))
        if not tokens:
            return None
        for area in self._kb:
            names = (area.name, *AREA_ALIASES.get(area.name, ()))
            for name in names:
                name_tokens = set(tokenize(name))
                if name_tokens and name_tokens <= tokens:
                    return area.name
        return None

    def suggest_similar(self, text: str | None) -> list[str]:
        """Up to five area names the user may have meant.

        Alias hits come first, then area-name hits, then areas whose
        characteristics or attractions mention one of the words.
        """
        cleaned = clean(text)
        if not cleaned:
            return []
        words = {token for token in tokenize(cleaned) if token not in _GENERIC_WORDS}
        suggestions: list[str] = []

        def add(name: str) -> None:
            if name not in suggestions:
                suggestions.append(name)

        for alias, name in self._aliases.items():
            alias_words = set(tokenize(alias)) - _GENERIC_WORDS
            if cleaned in alias or alias in cleaned or words & alias_words:
                add(name)

        for area in self._kb:
            lowered = area.name.lower()
            name_words = set(tokenize(lowered))
            if (
                cleaned in lowered
                or lowered in cleaned
                or any(token_matches(word, name_words) for word in words)
            ):
                add(area.name)

        keyword_words = {word for word in words if len(word) > 3}
        for area in self._kb:
            keywords = set()
            for phrase in (*area.characteristics, *area.popular_for):
                keywords.update(tokenize(phrase))
            if any(token_matches(word, keywords) for word in keyword_words):
                add(area.name)

        return suggestions[:MAX_SUGGESTIONS]
