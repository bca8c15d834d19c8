"""Natural-language extraction of activities and times."""

from .activity_extractor import (
    ActivityExtractor,
    OpenAIActivityExtractor,
    RuleBasedActivityExtractor,
)
from .time_parser import parse_time_hint

__all__ = [
    "ActivityExtractor",
    "OpenAIActivityExtractor",
    "RuleBasedActivityExtractor",
    "parse_time_hint",
]
