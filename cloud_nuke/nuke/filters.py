"""Region and age filtering shared by every resource kind."""

from __future__ import annotations

import logging
from typing import Iterable, List

from ..models.resource import ResourceDescriptor
from ..models.scope import AgeCutoff, Scope

logger = logging.getLogger(__name__)


class FilterEngine:
    """Decides whether a discovered resource is eligible for deletion.

    A resource is included only if every rule passes:
        1. Its region is in scope
        2. It is older than the cutoff (undated resources follow the cutoff's policy)

    The same rules apply to every kind.
    """

    def __init__(self, scope: Scope, cutoff: AgeCutoff) -> None:
        self.scope = scope
        self.cutoff = cutoff
        self._regions = scope.regions

    def include(self, descriptor: ResourceDescriptor) -> bool:
        return descriptor.region in self._regions and self.cutoff.admits(descriptor.created_at)

    def apply(self, descriptors: Iterable[ResourceDescriptor]) -> List[ResourceDescriptor]:
        """Keep the included descriptors, preserving input order."""
        included = []
        for descriptor in descriptors:
            if self.include(descriptor):
                included.append(descriptor)
            else:
                logger.debug(f"Filtered out {descriptor.label()}")
        return included
