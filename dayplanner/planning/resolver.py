"""Resolve activity requests into concrete venues."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import NamedTuple

from dayplanner.adapters.places import search_places
from dayplanner.config import Settings
from dayplanner.errors import ExternalProviderFailure, UnresolvableLocation
from dayplanner.exec.context import RunContext
from dayplanner.exec.executor import ToolExecutor
from dayplanner.models.activity import ActivityRequest, ResolvedVenue, Unresolved
from dayplanner.models.tool_results import PlaceCandidate
from dayplanner.normalize import LocationNormalizer, map_activity_to_place_type
from dayplanner.planning.pool import run_pooled

logger = logging.getLogger(__name__)

# Confidence weights
LOCATION_WEIGHT = 0.7
TYPE_WEIGHT = 0.2
RATING_WEIGHT = 0.1

VERIFIED_LOCATION_FLOOR = 0.8
NO_HINT_LOCATION_SCORE = 0.75
UNMAPPED_TYPE_SCORE = 0.5


class SearchPlan(NamedTuple):
    """What to ask the place search for one request."""

    query: str
    place_type: str | None
    location: str | None


class VenueResolver:
    """Match each activity to the most plausible real venue.

    Candidates are re-ranked by confidence: location match (0.7), category
    relevance (0.2) and rating (0.1). A candidate whose address does not
    verify against the requested location scores zero on location.
    """

    def __init__(
        self,
        normalizer: LocationNormalizer,
        executor: ToolExecutor,
        settings: Settings,
    ) -> None:
        self.normalizer = normalizer
        self.executor = executor
        self.settings = settings

    def plan_search(self, request: ActivityRequest) -> SearchPlan | None:
        """Build the place query, or None when there is nothing to look up.

        A named area narrows a category search; any other named place is
        looked up directly. A venue preference ("sandwich place") replaces
        the activity as the search subject.
        """
        preference = (request.search_preference or "").strip() or None
        place_type = self.expected_type(request)
        subject = preference or request.description
        location = self.normalizer.normalize(request.location_hint) or None
        metro = self.settings.metro_name
        if location:
            if place_type and location in self.normalizer.knowledge_base:
                return SearchPlan(f"{subject} in {location}, {metro}", place_type, location)
            return SearchPlan(f"{location}, {metro}", None, location)
        if place_type:
            return SearchPlan(f"{subject}, {metro}", place_type, None)
        return None

    @staticmethod
    def expected_type(request: ActivityRequest) -> str | None:
        place_type = map_activity_to_place_type(request.description)
        if place_type is None and request.search_preference:
            place_type = map_activity_to_place_type(request.search_preference)
        return place_type

    def confidence(
        self,
        candidate: PlaceCandidate,
        location: str | None,
        place_type: str | None,
    ) -> float:
        if location is None:
            location_score = NO_HINT_LOCATION_SCORE
        elif self.normalizer.verify(location, candidate.label, candidate.types):
            location_score = max(
                self.normalizer.location_overlap(location, candidate.label),
                VERIFIED_LOCATION_FLOOR,
            )
        else:
            location_score = 0.0

        if place_type is None:
            type_score = UNMAPPED_TYPE_SCORE
        else:
            type_score = 1.0 if place_type in candidate.types else 0.0

        rating_score = min(max(candidate.rating or 0.0, 0.0), 5.0) / 5.0
        return round(
            LOCATION_WEIGHT * location_score + TYPE_WEIGHT * type_score + RATING_WEIGHT * rating_score,
            4,
        )

    def resolve(self, request: ActivityRequest, ctx: RunContext) -> ResolvedVenue | Unresolved:
        plan = self.plan_search(request)
        if plan is None:
            return Unresolved(
                request=request,
                kind="unresolvable_location",
                reason=f'"{request.description}" needs a place to go',
                suggestions=[],
            )

        try:
            candidates = search_places(
                self.executor, ctx, plan.query, plan.place_type, settings=self.settings
            )
        except ExternalProviderFailure as e:
            logger.warning(f"Place search failed for {request.description!r}: {e}")
            return Unresolved(
                request=request,
                kind="external_provider_failure",
                reason="Venue search is unavailable right now",
            )

        # For a direct lookup the category comes from the activity itself
        expected_type = self.expected_type(request)
        scored = sorted(
            (
                (self.confidence(candidate, plan.location, expected_type), i, candidate)
                for i, candidate in enumerate(candidates)
            ),
            key=lambda item: (-item[0], item[1]),
        )
        if not scored or scored[0][0] < self.settings.min_match_confidence:
            wanted = request.location_hint or request.description
            suggestions = self.normalizer.suggest_similar(wanted)
            error = UnresolvableLocation(wanted, suggestions)
            logger.info(
                f"No confident match for {wanted!r}",
                extra={"best": scored[0][0] if scored else None, "candidates": len(candidates)},
            )
            return Unresolved(
                request=request,
                kind="unresolvable_location",
                reason=str(error),
                suggestions=suggestions,
            )

        score, _, best = scored[0]
        alternatives = [
            self._venue(candidate, alt_score, plan.location)
            for alt_score, _, candidate in scored[1:]
            if alt_score >= self.settings.min_match_confidence
            and candidate.place_id != best.place_id
        ][: self.settings.max_alternatives]
        venue = self._venue(best, score, plan.location)
        return venue.model_copy(update={"alternatives": alternatives})

    def _venue(
        self, candidate: PlaceCandidate, score: float, location: str | None
    ) -> ResolvedVenue:
        area = self.normalizer.infer_area(candidate.label)
        if area is None and location in self.normalizer.knowledge_base:
            area = location
        return ResolvedVenue(
            place_id=candidate.place_id,
            name=candidate.name,
            address=candidate.formatted_address,
            types=candidate.types,
            rating=candidate.rating,
            location=candidate.location,
            confidence=score,
            area=area,
        )

    def resolve_all(
        self, requests: Sequence[ActivityRequest], ctx: RunContext
    ) -> list[ResolvedVenue | Unresolved]:
        """Resolve requests concurrently (bounded by ``fanout_cap``), keeping order."""
        return run_pooled(
            lambda request: self.resolve(request, ctx),
            requests,
            ctx,
            self.settings.fanout_cap,
        )
