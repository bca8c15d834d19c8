"""Activity request and venue resolution models."""

from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import BaseModel, Field

from .common import Geo


class ActivityRequest(BaseModel):
    """One activity extracted from the user's free text."""

    description: str = Field(description="What the user wants to do")
    time: dt.time | None = Field(default=None, description="Explicit start time if given")
    location_hint: str | None = Field(default=None, description="Free-text location")
    search_preference: str | None = Field(
        default=None, description="Kind of venue the user asked for, e.g. 'sandwich place'"
    )
    rank: int = Field(ge=0, description="Position in the user's narrative")


class ResolvedVenue(BaseModel):
    """A concrete venue chosen for an activity."""

    place_id: str = Field(description="Provider place identifier")
    name: str = Field(description="Canonical venue name")
    address: str = Field(description="Formatted address")
    types: list[str] = Field(default=[], description="Category tags")
    rating: float | None = Field(default=None, description="Provider rating 0-5")
    location: Geo | None = Field(default=None, description="Venue coordinate")
    confidence: float = Field(ge=0.0, le=1.0, description="Match confidence")
    area: str | None = Field(default=None, description="Canonical area name if known")
    alternatives: list[ResolvedVenue] = Field(
        default=[], description="Runner-up verified venues, best first"
    )


class Unresolved(BaseModel):
    """An activity that could not be turned into a venue."""

    request: ActivityRequest = Field(description="The activity that was dropped")
    kind: Literal["unresolvable_location", "external_provider_failure"] = Field(
        description="Why it was dropped"
    )
    reason: str = Field(description="Human-readable reason")
    suggestions: list[str] = Field(default=[], description="Areas the user may have meant")
