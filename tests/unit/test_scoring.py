"""Tests for gap-filler ranking."""

from dayplanner.models import TimeBucket, WeatherReport
from dayplanner.planning import WeightedFillerScorer
from dayplanner.planning.scoring import FillerCandidate, GapContext

SUNNY = WeatherReport(condition_category="clear", is_outdoor_suitable=True)
RAINY = WeatherReport(condition_category="rain", is_outdoor_suitable=False)


def gap(weather=SUNNY, bucket=TimeBucket.morning, is_weekend=False) -> GapContext:
    return GapContext(bucket=bucket, is_weekend=is_weekend, weather=weather, max_crowd=3)


def test_quieter_area_scores_higher(kb):
    scorer = WeightedFillerScorer()
    quiet = FillerCandidate(kb.get("Charlestown"), "USS Constitution", 2)
    busy = FillerCandidate(kb.get("Back Bay"), "Copley Square", 2)

    assert scorer.score(quiet, gap()) > scorer.score(busy, gap())


def test_closer_tier_scores_higher(kb):
    scorer = WeightedFillerScorer()
    area = kb.get("Somerville")

    assert scorer.score(FillerCandidate(area, "Davis Square", 0), gap()) > scorer.score(
        FillerCandidate(area, "Davis Square", 2), gap()
    )


def test_outdoor_attraction_is_penalized_in_bad_weather(kb):
    scorer = WeightedFillerScorer(crowd_weight=0.0, weather_weight=1.0, proximity_weight=0.0)
    area = kb.get("Jamaica Plain")

    assert scorer.score(FillerCandidate(area, "Jamaica Pond", 0), gap(RAINY)) == 0.0
    assert scorer.score(FillerCandidate(area, "Jamaica Pond", 0), gap(SUNNY)) == 1.0
    assert scorer.score(FillerCandidate(area, "JFK Library", 0), gap(RAINY)) == 1.0


def test_weights_come_from_settings(settings):
    scorer = WeightedFillerScorer.from_settings(settings)

    assert (scorer.crowd_weight, scorer.weather_weight, scorer.proximity_weight) == (
        settings.crowd_weight,
        settings.weather_weight,
        settings.proximity_weight,
    )


def test_weekend_uses_weekend_crowd_level(kb):
    scorer = WeightedFillerScorer(crowd_weight=1.0, weather_weight=0.0, proximity_weight=0.0)
    candidate = FillerCandidate(kb.get("Financial District"), "Post Office Square", 2)

    assert scorer.score(candidate, gap(is_weekend=True)) == 1.0
    assert scorer.score(candidate, gap(is_weekend=False)) == 0.0
