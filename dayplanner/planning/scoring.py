"""Ranking strategies for gap-filler candidates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, NamedTuple, Protocol

from dayplanner.config import Settings
from dayplanner.models.area import Area
from dayplanner.models.common import TimeBucket
from dayplanner.models.tool_results import WeatherReport
from dayplanner.verify.weather import looks_outdoor

Pace = Literal["relaxed", "moderate", "busy"]

# Highest crowd level tolerated per pace
PACE_MAX_CROWD: dict[str, int] = {"relaxed": 3, "moderate": 4, "busy": 5}

# 0: neighbor of the current area, 1: same region, 2: anywhere
PROXIMITY_BY_TIER = {0: 1.0, 1: 0.6, 2: 0.2}


class FillerCandidate(NamedTuple):
    """An attraction in an area, tagged with how far it is from the current stop."""

    area: Area
    attraction: str
    tier: int


@dataclass(frozen=True)
class GapContext:
    """Conditions of the gap being filled."""

    bucket: TimeBucket
    is_weekend: bool
    weather: WeatherReport | None
    max_crowd: int


class FillerScorer(Protocol):
    """Strategy for ranking filler candidates; higher is better."""

    def score(self, candidate: FillerCandidate, gap: GapContext) -> float: ...


class WeightedFillerScorer:
    """Linear blend of crowd fit, weather fit and proximity.

    Crowd fit is 1.0 for the quietest areas and falls to 0.0 at level 5.
    Weather fit is 0.0 only for an outdoor-looking attraction when the
    forecast is unsuitable.
    """

    def __init__(
        self, crowd_weight: float = 0.5, weather_weight: float = 0.2, proximity_weight: float = 0.3
    ) -> None:
        self.crowd_weight = crowd_weight
        self.weather_weight = weather_weight
        self.proximity_weight = proximity_weight

    @classmethod
    def from_settings(cls, settings: Settings) -> WeightedFillerScorer:
        return cls(settings.crowd_weight, settings.weather_weight, settings.proximity_weight)

    def score(self, candidate: FillerCandidate, gap: GapContext) -> float:
        crowd = candidate.area.crowd_levels.for_bucket(gap.bucket, gap.is_weekend)
        crowd_fit = (5 - crowd) / 4
        weather_fit = 1.0
        if gap.weather is not None and not gap.weather.is_outdoor_suitable:
            weather_fit = 0.0 if looks_outdoor(candidate.attraction) else 1.0
        proximity = PROXIMITY_BY_TIER.get(candidate.tier, 0.0)
        return (
            self.crowd_weight * crowd_fit
            + self.weather_weight * weather_fit
            + self.proximity_weight * proximity
        )
