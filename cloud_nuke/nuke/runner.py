"""Nuke run orchestration.

A run moves through scoping, discovery, preview, confirmation and deletion.
Every collaborator is passed in explicitly; nothing is shared between runs.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from ..adapters.base import AdapterRegistry
from ..errors import DiscoveryError, NukeFailedError
from ..models.inventory import Inventory
from ..models.outcome import DiscoveryFailure
from ..models.run import NukeRun, RunState
from ..models.scope import UndatedPolicy
from ..utils.timeutil import utcnow
from .audit import AuditStorage
from .confirmation import ConfirmationGate
from .deleter import DeletionOrchestrator
from .discovery import DEFAULT_MAX_WORKERS, DiscoveryOrchestrator
from .duration import compute_cutoff
from .filters import FilterEngine
from .scope import ScopeResolver

logger = logging.getLogger(__name__)

Presenter = Callable[[Inventory, List[DiscoveryFailure]], None]


class NukeRunner:
    """Drives one run from scope validation to the final report.

    Attributes:
        registry: Adapters for every supported resource kind
        gate: Confirmation gate consulted once before deletion
        presenter: Called once with the filtered inventory before confirmation
        audit_storage: Where run logs are written (optional)
        max_workers: Bound on concurrent (kind, region) units
        fail_on_discovery_error: Abort before confirmation if any listing failed
    """

    def __init__(
        self,
        registry: AdapterRegistry,
        gate: ConfirmationGate,
        presenter: Optional[Presenter] = None,
        audit_storage: Optional[AuditStorage] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        fail_on_discovery_error: bool = False,
    ) -> None:
        self.registry = registry
        self.gate = gate
        self.presenter = presenter
        self.audit_storage = audit_storage
        self.max_workers = max_workers
        self.fail_on_discovery_error = fail_on_discovery_error
        self.scope_resolver = ScopeResolver()

    def run(
        self,
        provider: str,
        all_regions: Iterable[str],
        excluded_regions: Iterable[str] = (),
        older_than: str = "0s",
        undated_policy: UndatedPolicy = UndatedPolicy.ELIGIBLE,
        now: Optional[datetime] = None,
    ) -> NukeRun:
        """Execute a run.

        Args:
            provider: Provider name for reporting
            all_regions: Every region known to the provider
            excluded_regions: Regions to leave untouched
            older_than: Only nuke resources older than this duration
            undated_policy: Treatment of resources without a creation time
            now: Run start time (defaults to the current UTC time)

        Returns:
            The run in a terminal state (aborted or reported)

        Raises:
            InvalidScopeError: Invalid exclusion; nothing was listed
            DurationParseError: Invalid --older-than; nothing was listed
            DiscoveryError: Listing failed and fail_on_discovery_error is set
            ConfirmationError: The confirmation answer could not be read
            NukeFailedError: Some deletions failed; all others were attempted
        """
        started_at = now or utcnow()
        run = NukeRun(run_id=f"run_{uuid.uuid4()}", provider=provider, started_at=started_at)

        # Both validations happen before any listing call
        scope = self.scope_resolver.resolve(all_regions, excluded_regions)
        cutoff = compute_cutoff(older_than, now=started_at, undated_policy=undated_policy)
        run.scope = scope
        run.cutoff = cutoff
        run.transition(RunState.SCOPED)

        logger.info(f"Retrieving all active {provider.upper()} resources")
        discovery = DiscoveryOrchestrator(
            self.registry,
            FilterEngine(scope, cutoff),
            max_workers=self.max_workers,
        ).discover()
        inventory = discovery.inventory
        run.discovery_failures = discovery.failures
        run.resource_count = inventory.count
        run.transition(RunState.DISCOVERED)

        if discovery.has_failures and self.fail_on_discovery_error:
            run.transition(RunState.REPORTED)
            self._finish(run, inventory)
            raise DiscoveryError(discovery.failures)

        if inventory.is_empty:
            logger.info("Nothing to nuke, you're all good!")
            run.transition(RunState.REPORTED)
            self._finish(run, inventory)
            return run

        if self.presenter is not None:
            self.presenter(inventory, discovery.failures)

        run.transition(RunState.AWAITING_CONFIRMATION)
        if not self.gate.confirm():
            logger.info("Confirmation not given, nothing was nuked")
            run.transition(RunState.ABORTED)
            self._finish(run, inventory)
            return run

        run.transition(RunState.DELETING)
        deleter = DeletionOrchestrator(self.registry, max_workers=self.max_workers)
        try:
            run.outcome = deleter.nuke(inventory)
        except NukeFailedError as e:
            run.outcome = e.outcome
            run.transition(RunState.REPORTED)
            self._finish(run, inventory)
            raise

        run.transition(RunState.REPORTED)
        self._finish(run, inventory)
        return run

    def _finish(self, run: NukeRun, inventory: Inventory) -> None:
        run.completed_at = utcnow()
        if self.audit_storage is None:
            return
        try:
            path = self.audit_storage.log_run(run, inventory)
            logger.debug(f"Wrote audit log {path}")
        except OSError as e:
            logger.error(f"Failed to write audit log for {run.run_id}: {e}")
