"""Location normalization."""

from .activity_types import map_activity_to_place_type
from .normalizer import LANDMARK_TYPES, LocationNormalizer

__all__ = ["LANDMARK_TYPES", "LocationNormalizer", "map_activity_to_place_type"]
