"""End-to-end day planning: extract, resolve, schedule, weather-adjust, fill, travel, assemble."""

from __future__ import annotations

import logging
import time

from dayplanner.adapters import build_registry
from dayplanner.config import Settings, get_settings, has_real_key
from dayplanner.errors import EmptyPlan, PlanAborted, PlannerError
from dayplanner.exec.cache import InMemoryCache
from dayplanner.exec.context import RunContext
from dayplanner.exec.executor import ToolExecutor
from dayplanner.knowledge.base import AreaKnowledgeBase, load_default_knowledge_base
from dayplanner.metrics.core import record_plan_outcome
from dayplanner.models.activity import ResolvedVenue, Unresolved
from dayplanner.models.common import StopKind
from dayplanner.models.itinerary import Itinerary
from dayplanner.models.plan import PlanRequest
from dayplanner.nlp.activity_extractor import ActivityExtractor, OpenAIActivityExtractor
from dayplanner.normalize import LocationNormalizer
from dayplanner.planning.assembler import assemble
from dayplanner.planning.gap_filler import GapFiller
from dayplanner.planning.resolver import VenueResolver
from dayplanner.planning.scheduler import Scheduler
from dayplanner.planning.scoring import FillerScorer
from dayplanner.planning.travel import TravelPlanner
from dayplanner.planning.weather_swap import WeatherSwapper

logger = logging.getLogger(__name__)


class DayPlanner:
    """Wire the planning stages together around one shared tool executor.

    One instance serves many requests; per-request state lives in the
    ``RunContext`` and in local variables only.
    """

    def __init__(
        self,
        executor: ToolExecutor,
        settings: Settings,
        kb: AreaKnowledgeBase | None = None,
        scorer: FillerScorer | None = None,
        extractor: ActivityExtractor | None = None,
    ) -> None:
        self.settings = settings
        self.executor = executor
        self.kb = kb or load_default_knowledge_base()
        self.normalizer = LocationNormalizer(self.kb)
        self.extractor = extractor or ActivityExtractor(executor, settings)
        self.resolver = VenueResolver(self.normalizer, executor, settings)
        self.scheduler = Scheduler(settings)
        self.weather_swapper = WeatherSwapper(executor, settings)
        self.gap_filler = GapFiller(self.kb, self.normalizer, executor, settings, scorer)
        self.travel = TravelPlanner(executor, settings)

    def new_context(self, run_id: str) -> RunContext:
        return RunContext(run_id, deadline_s=self.settings.plan_deadline_s)

    def plan(self, request: PlanRequest, ctx: RunContext) -> Itinerary:
        """Build a complete itinerary or raise.

        Raises:
            EmptyPlan: Nothing could be extracted or resolved.
            PlanAborted: The run was cancelled or overran its deadline.
        """
        started = time.monotonic()
        try:
            itinerary = self._plan(request, ctx)
        except PlannerError as e:
            outcome = e.reason if isinstance(e, PlanAborted) else type(e).__name__
            record_plan_outcome(
                ctx.run_id, outcome, latency_ms=int((time.monotonic() - started) * 1000)
            )
            raise
        record_plan_outcome(
            ctx.run_id,
            "ok",
            stops=len(itinerary.stops),
            fillers=sum(1 for s in itinerary.stops if s.kind is StopKind.gap_filler),
            unresolved=len(itinerary.unresolved),
            latency_ms=int((time.monotonic() - started) * 1000),
        )
        return itinerary

    def _plan(self, request: PlanRequest, ctx: RunContext) -> Itinerary:
        if not request.free_text_plans.strip():
            raise EmptyPlan("blank plan text")

        ctx.raise_if_aborted()
        activities = self.extractor.extract(request.free_text_plans, ctx)
        if not activities:
            raise EmptyPlan("no activities extracted")

        ctx.raise_if_aborted()
        outcomes = self.resolver.resolve_all(activities, ctx)
        resolved = [
            (activity, outcome)
            for activity, outcome in zip(activities, outcomes, strict=True)
            if isinstance(outcome, ResolvedVenue)
        ]
        unresolved = [outcome for outcome in outcomes if isinstance(outcome, Unresolved)]
        for item in unresolved:
            logger.info(
                f"Dropped activity {item.request.description!r}: {item.reason}",
                extra={"run_id": ctx.run_id, "kind": item.kind},
            )
        if not resolved:
            raise EmptyPlan("no activities could be resolved")

        ctx.raise_if_aborted()
        plan_start = self.scheduler.plan_start(request.day, request.start_time)
        stops = self.scheduler.assign_times(resolved, plan_start)
        stops = self.weather_swapper.adjust(stops, ctx)
        stops = self.gap_filler.fill_gaps(stops, plan_start, ctx)

        ctx.raise_if_aborted()
        legs = self.travel.plan_legs(stops, ctx)

        ctx.raise_if_aborted()
        return assemble(stops, legs, unresolved, user_id=request.user_id)


def build_default_planner(settings: Settings | None = None) -> DayPlanner:
    """Planner wired to the live providers with a process-wide cache."""
    settings = settings or get_settings()
    registry = build_registry(settings)
    if has_real_key(settings.openai_api_key):
        registry.register("extractor", OpenAIActivityExtractor(settings))
    executor = ToolExecutor(
        registry, settings, cache=InMemoryCache(), max_workers=max(8, settings.fanout_cap * 2)
    )
    return DayPlanner(executor, settings)
