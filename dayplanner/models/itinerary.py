"""Itinerary models for scheduled stops and the final day plan."""

from __future__ import annotations

from datetime import datetime, timedelta
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .activity import ActivityRequest, ResolvedVenue, Unresolved
from .common import StopKind, TravelMode


class ScheduledStop(BaseModel):
    """A venue with an assigned start time and duration."""

    model_config = ConfigDict(frozen=True)

    venue: ResolvedVenue = Field(description="Venue being visited")
    request: ActivityRequest | None = Field(
        default=None, description="Originating activity; None for gap fillers"
    )
    start: datetime = Field(description="Timezone-aware start time")
    duration_min: int = Field(gt=0, description="Assigned duration in minutes")
    kind: StopKind = Field(description="user_requested or gap_filler")

    @field_validator("start")
    @classmethod
    def _require_tz(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            raise ValueError("start must be timezone-aware")
        return value

    @property
    def end(self) -> datetime:
        return self.start + timedelta(minutes=self.duration_min)

    @property
    def rank(self) -> int | None:
        return self.request.rank if self.request else None


class TravelLeg(BaseModel):
    """Travel between two consecutive stops."""

    origin: str = Field(description="Name of the stop being left")
    to: str = Field(description="Name of the destination stop")
    duration_min: int = Field(ge=0, description="Travel duration in minutes")
    mode: TravelMode = Field(description="Transportation mode")
    estimated: bool = Field(default=False, description="True when not from the provider")


class Itinerary(BaseModel):
    """A single day's plan: ordered stops joined by travel legs."""

    id: str = Field(default_factory=lambda: str(uuid4()), description="Itinerary id")
    user_id: str | None = Field(default=None, description="Owning user reference")
    created_at: datetime = Field(description="Creation timestamp")
    stops: list[ScheduledStop] = Field(description="Stops ordered by start time")
    legs: list[TravelLeg] = Field(description="Travel legs between consecutive stops")
    unresolved: list[Unresolved] = Field(default=[], description="Activities that were dropped")


# Output shapes (camelCase on the wire)


class PlaceDetailsOut(BaseModel):
    rating: float | None = None
    types: list[str] = []


class AlternativeOut(BaseModel):
    name: str
    address: str
    rating: float | None = None


class PlaceOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    address: str
    scheduled_time: datetime = Field(alias="scheduledTime")
    display_time: str = Field(alias="displayTime")
    duration: int = Field(description="Duration in minutes")
    kind: StopKind
    details: PlaceDetailsOut
    alternatives: list[AlternativeOut] = []


class TravelTimeOut(BaseModel):
    duration: int = Field(description="Travel minutes")
    to: str
    mode: TravelMode
    estimated: bool


class UnresolvedOut(BaseModel):
    activity: str
    reason: str
    suggestions: list[str] = []


class ItineraryOut(BaseModel):
    """Response body of ``POST /plan``."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: str | None = Field(default=None, alias="userId")
    created_at: datetime = Field(alias="createdAt")
    places: list[PlaceOut]
    travel_times: list[TravelTimeOut] = Field(alias="travelTimes")
    unresolved: list[UnresolvedOut] = []

    @classmethod
    def from_itinerary(cls, itinerary: Itinerary) -> ItineraryOut:
        places = [
            PlaceOut(
                name=stop.venue.name,
                address=stop.venue.address,
                scheduled_time=stop.start,
                display_time=format_display_time(stop.start),
                duration=stop.duration_min,
                kind=stop.kind,
                details=PlaceDetailsOut(rating=stop.venue.rating, types=stop.venue.types),
                alternatives=[
                    AlternativeOut(name=alt.name, address=alt.address, rating=alt.rating)
                    for alt in stop.venue.alternatives
                ],
            )
            for stop in itinerary.stops
        ]
        travel = [
            TravelTimeOut(
                duration=leg.duration_min, to=leg.to, mode=leg.mode, estimated=leg.estimated
            )
            for leg in itinerary.legs
        ]
        unresolved = [
            UnresolvedOut(
                activity=item.request.description,
                reason=item.reason,
                suggestions=item.suggestions,
            )
            for item in itinerary.unresolved
        ]
        return cls(
            id=itinerary.id,
            user_id=itinerary.user_id,
            created_at=itinerary.created_at,
            places=places,
            travel_times=travel,
            unresolved=unresolved,
        )


def format_display_time(value: datetime) -> str:
    """Format as a 12-hour clock label, e.g. ``1:05 PM``."""
    return value.strftime("%I:%M %p").lstrip("0")
