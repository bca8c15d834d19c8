"""Verification helpers for schedule and weather constraints."""

from .nonoverlap import assert_non_overlapping, find_overlap
from .weather import assess_forecast, is_venue_outdoor

__all__ = [
    "assert_non_overlapping",
    "assess_forecast",
    "find_overlap",
    "is_venue_outdoor",
]
