"""Models for tool results from external data sources."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from .common import Geo, TravelMode


class PlaceCandidate(BaseModel):
    """Place search result."""

    place_id: str = Field(description="Provider place identifier")
    name: str = Field(description="Place name")
    formatted_address: str = Field(default="", description="Formatted address")
    types: list[str] = Field(default=[], description="Provider place types")
    rating: float | None = Field(default=None, description="Average rating 0-5")
    location: Geo | None = Field(default=None, description="Coordinate")

    @property
    def label(self) -> str:
        """Name and address as one string for matching."""
        if not self.formatted_address:
            return self.name
        return f"{self.name}, {self.formatted_address}"


class DirectionsResult(BaseModel):
    """Travel estimate between two places."""

    duration_minutes: int = Field(ge=0, description="Travel duration in minutes")
    mode: TravelMode = Field(description="Transportation mode")


class WeatherReport(BaseModel):
    """Weather suitability for a date and location."""

    condition_category: str = Field(description="clear, cloudy, rain, snow, storm, ...")
    is_outdoor_suitable: bool = Field(description="Whether outdoor venues are advisable")
    temperature_c: float | None = Field(default=None, description="Temperature in Celsius")
    wind_kmh: float | None = Field(default=None, description="Wind speed in km/h")
    forecast_time: datetime | None = Field(
        default=None, description="Timestamp of the forecast entry used"
    )
