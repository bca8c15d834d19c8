"""FastAPI application factory."""

import logging
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dayplanner.api.health import get_health
from dayplanner.api.plan import router as plan_router
from dayplanner.config import get_settings

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Day Planner API",
        description="Turns a free-text day plan into a timed itinerary",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.ui_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/healthz")
    def healthz() -> dict[str, Any]:
        """Health check endpoint."""
        return get_health().model_dump()

    app.include_router(plan_router)

    logger.info(f"Day planner ready for {settings.metro_name}")
    return app


# Create app instance for uvicorn
app = create_app()
