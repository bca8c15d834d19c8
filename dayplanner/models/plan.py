"""Inbound planning request model."""

from __future__ import annotations

from datetime import date, time

from pydantic import BaseModel, ConfigDict, Field


class PlanRequest(BaseModel):
    """Request body of ``POST /plan``."""

    model_config = ConfigDict(populate_by_name=True)

    day: date = Field(alias="date", description="Day being planned")
    start_time: time = Field(alias="startTime", description="When the day starts")
    free_text_plans: str = Field(
        alias="freeTextPlans", max_length=2000, description="What the user wants to do"
    )
    user_id: str | None = Field(default=None, alias="userId", description="Owning user")
