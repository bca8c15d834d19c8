"""Plan API endpoint."""

import logging
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, status

from dayplanner.errors import EmptyPlan, PlanAborted, PlannerError
from dayplanner.models.itinerary import ItineraryOut
from dayplanner.models.plan import PlanRequest
from dayplanner.planning.pipeline import DayPlanner, build_default_planner

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/plan", tags=["plan"])

_planner: DayPlanner | None = None


def get_planner() -> DayPlanner:
    """Dependency returning the process-wide planner."""
    global _planner
    if _planner is None:
        _planner = build_default_planner()
    return _planner


@router.post("", response_model=ItineraryOut, response_model_by_alias=True)
def create_plan(
    request: PlanRequest,
    planner: DayPlanner = Depends(get_planner),
) -> ItineraryOut:
    """Plan a day from free text and return the itinerary.

    Raises:
        HTTPException: 422 when nothing plannable was found, 504 when the
            run overran its deadline, 500 for any other planning failure.
    """
    ctx = planner.new_context(str(uuid4()))
    try:
        itinerary = planner.plan(request, ctx)
    except EmptyPlan as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.user_message
        ) from e
    except PlanAborted as e:
        raise HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail=e.user_message
        ) from e
    except PlannerError as e:
        logger.error(f"Planning run {ctx.run_id} failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=PlannerError.user_message
        ) from e
    finally:
        ctx.cancel()
    return ItineraryOut.from_itinerary(itinerary)
