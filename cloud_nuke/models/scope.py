"""Run scope and age cutoff models.

Both are computed once at run start and shared read-only by every discovery
and deletion unit.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import FrozenSet, List, Optional


class UndatedPolicy(Enum):
    """How the age filter treats resources with no creation time."""

    ELIGIBLE = "eligible"
    EXCLUDE = "exclude"


@dataclass(frozen=True)
class Scope:
    """Regions eligible for a run.

    Attributes:
        all_regions: Every region known to the provider
        excluded_regions: Validated user exclusions (subset of all_regions)
    """

    all_regions: FrozenSet[str]
    excluded_regions: FrozenSet[str] = frozenset()

    @property
    def regions(self) -> FrozenSet[str]:
        """In-scope regions: all known regions minus exclusions."""
        return self.all_regions - self.excluded_regions

    def contains(self, region: str) -> bool:
        return region in self.regions

    def sorted_regions(self) -> List[str]:
        return sorted(self.regions)


@dataclass(frozen=True)
class AgeCutoff:
    """Only resources created strictly before `instant` are eligible.

    Attributes:
        instant: Cutoff instant (run start minus the --older-than duration)
        older_than: The duration the cutoff was computed from
        undated_policy: Treatment of resources without a creation time
    """

    instant: datetime
    older_than: timedelta = timedelta(0)
    undated_policy: UndatedPolicy = UndatedPolicy.ELIGIBLE

    def admits(self, created_at: Optional[datetime]) -> bool:
        if created_at is None:
            return self.undated_policy == UndatedPolicy.ELIGIBLE
        return created_at < self.instant
