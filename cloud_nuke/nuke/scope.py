"""Region scope resolution."""

from __future__ import annotations

import logging
from typing import Iterable

from ..errors import InvalidScopeError
from ..models.scope import Scope

logger = logging.getLogger(__name__)


class ScopeResolver:
    """Validates region exclusions against the provider's known regions."""

    def resolve(self, all_regions: Iterable[str], excluded_regions: Iterable[str] = ()) -> Scope:
        """Build the run scope.

        Runs before any discovery.

        Args:
            all_regions: Every region known to the provider
            excluded_regions: User-supplied exclusions

        Returns:
            Scope with the validated exclusions

        Raises:
            InvalidScopeError: On the first exclusion that is not a known region
        """
        known = frozenset(all_regions)
        excluded = []

        for region in excluded_regions:
            if region not in known:
                raise InvalidScopeError(region, known)
            excluded.append(region)

        scope = Scope(all_regions=known, excluded_regions=frozenset(excluded))
        if scope.excluded_regions:
            logger.info(f"Excluding regions: {', '.join(sorted(scope.excluded_regions))}")
        logger.debug(f"{len(scope.regions)} of {len(known)} regions in scope")
        return scope
