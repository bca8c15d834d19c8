"""Area knowledge-base models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .common import TimeBucket


class CrowdLevels(BaseModel):
    """Crowd level (1 quiet .. 5 packed) per time bucket."""

    model_config = ConfigDict(frozen=True)

    morning: int = Field(ge=1, le=5)
    afternoon: int = Field(ge=1, le=5)
    evening: int = Field(ge=1, le=5)
    weekend: int = Field(ge=1, le=5)

    def for_bucket(self, bucket: TimeBucket, is_weekend: bool = False) -> int:
        """Crowd level for a time bucket; weekends use the weekend level."""
        if is_weekend:
            return self.weekend
        return getattr(self, bucket.value)


class Area(BaseModel):
    """A curated geographic unit of the metro area."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Canonical area name")
    type: Literal["region", "neighborhood", "area"] = Field(description="Kind of area")
    region: str = Field(description="Region the area belongs to")
    characteristics: frozenset[str] = Field(description="Descriptive tags")
    neighbors: frozenset[str] = Field(description="Names of adjacent areas")
    popular_for: tuple[str, ...] = Field(description="Popular attractions and tags")
    crowd_levels: CrowdLevels = Field(description="Crowd levels by time bucket")

    @property
    def attractions(self) -> tuple[str, ...]:
        """Named attractions; lower-case ``popular_for`` entries are tags."""
        return tuple(entry for entry in self.popular_for if entry[:1].isupper())
