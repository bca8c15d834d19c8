"""Indexed, read-only area knowledge base."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from functools import lru_cache
from types import MappingProxyType
from typing import Literal, NamedTuple

from dayplanner.models.area import Area
from dayplanner.models.common import TimeBucket

from .areas import BOSTON_AREAS

logger = logging.getLogger(__name__)

QUIET_THRESHOLD = 3


class NeighborIssue(NamedTuple):
    """A neighbor edge that is not mirrored or points at an unknown area."""

    area: str
    neighbor: str
    kind: Literal["one_way", "dangling"]


class AreaKnowledgeBase:
    """Immutable lookup over curated areas, keyed by lower-cased name.

    Built once per process and shared between requests. Lookups are
    case-insensitive; every query returns areas in dataset order unless
    documented otherwise.
    """

    def __init__(self, areas: Iterable[Area]) -> None:
        index: dict[str, Area] = {}
        for area in areas:
            key = area.name.lower()
            if key in index:
                raise ValueError(f"Duplicate area name: {area.name}")
            index[key] = area
        self._index: Mapping[str, Area] = MappingProxyType(index)

    @classmethod
    def from_records(cls, records: Iterable[Mapping]) -> AreaKnowledgeBase:
        """Validate raw records and build a knowledge base from them."""
        return cls(Area.model_validate(record) for record in records)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip().lower() in self._index

    def __iter__(self) -> Iterator[Area]:
        return iter(self._index.values())

    def __len__(self) -> int:
        return len(self._index)

    @property
    def names(self) -> list[str]:
        return [area.name for area in self._index.values()]

    def get(self, name: str | None) -> Area | None:
        if not name:
            return None
        return self._index.get(name.strip().lower())

    def find_by_characteristics(
        self, tags: Iterable[str], exclude: Iterable[str] = ()
    ) -> list[Area]:
        """Areas with a characteristic containing any of ``tags``."""
        wanted = [tag.lower() for tag in tags if tag]
        excluded = {name.lower() for name in exclude}
        return [
            area
            for area in self._index.values()
            if area.name.lower() not in excluded
            and any(tag in char.lower() for tag in wanted for char in area.characteristics)
        ]

    def crowd_level(
        self, area: Area | str, bucket: TimeBucket, is_weekend: bool = False
    ) -> int | None:
        """Crowd level of an area for a bucket, or None for unknown areas."""
        if isinstance(area, str):
            area = self.get(area)
            if area is None:
                return None
        return area.crowd_levels.for_bucket(bucket, is_weekend)

    def find_quiet_areas(
        self,
        bucket: TimeBucket,
        is_weekend: bool = False,
        near: str | None = None,
        threshold: int = QUIET_THRESHOLD,
    ) -> list[Area]:
        """Areas with crowd level below ``threshold``.

        When ``near`` names a known area, its neighbors sort first.
        """
        quiet = [
            area
            for area in self._index.values()
            if area.crowd_levels.for_bucket(bucket, is_weekend) < threshold
        ]
        anchor = self.get(near)
        if anchor is not None:
            quiet.sort(key=lambda area: 0 if area.name in anchor.neighbors else 1)
        return quiet

    def in_region(self, region: str) -> list[Area]:
        region = region.strip().lower()
        return [area for area in self._index.values() if area.region.lower() == region]

    def nearby(self, name: str) -> list[Area]:
        """The named area followed by its known neighbors.

        Neighbors missing from the dataset are skipped.
        """
        area = self.get(name)
        if area is None:
            return []
        neighbors = [self._index[n.lower()] for n in sorted(area.neighbors) if n.lower() in self._index]
        return [area, *neighbors]

    def neighbor_asymmetries(self) -> list[NeighborIssue]:
        issues: list[NeighborIssue] = []
        for area in self._index.values():
            for neighbor_name in sorted(area.neighbors):
                neighbor = self._index.get(neighbor_name.lower())
                if neighbor is None:
                    issues.append(NeighborIssue(area.name, neighbor_name, "dangling"))
                elif area.name not in neighbor.neighbors:
                    issues.append(NeighborIssue(area.name, neighbor_name, "one_way"))
        return issues


@lru_cache(maxsize=1)
def load_default_knowledge_base() -> AreaKnowledgeBase:
    """Load the built-in Boston dataset once per process."""
    kb = AreaKnowledgeBase.from_records(BOSTON_AREAS)
    issues = kb.neighbor_asymmetries()
    if issues:
        logger.info(
            f"Area neighbor graph has {len(issues)} asymmetric or dangling edges",
            extra={"issues": [issue._asdict() for issue in issues]},
        )
    return kb
