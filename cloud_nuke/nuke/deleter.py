"""Deletion orchestration with aggregated failure reporting."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List

from ..adapters.base import AdapterRegistry
from ..errors import NukeFailedError
from ..models.inventory import Batch, Inventory
from ..models.outcome import DeletionRecord, DeletionStatus, NukeOutcome
from ..utils.timeutil import utcnow
from .collector import ResultCollector
from .discovery import DEFAULT_MAX_WORKERS

logger = logging.getLogger(__name__)


class DeletionOrchestrator:
    """Deletes a confirmed inventory, one delete call per (kind, region) batch.

    No batch failure stops any other batch. Once every batch has been
    attempted, nuke() raises NukeFailedError listing each failed resource.
    """

    def __init__(self, registry: AdapterRegistry, max_workers: int = DEFAULT_MAX_WORKERS) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.registry = registry
        self.max_workers = max_workers

    def nuke(self, inventory: Inventory) -> NukeOutcome:
        """Delete everything in the inventory.

        Returns:
            NukeOutcome when every resource was deleted

        Raises:
            NukeFailedError: After all batches ran, if any resource failed
        """
        outcome = self.execute(inventory)
        if outcome.has_failures:
            raise NukeFailedError(outcome)
        return outcome

    def execute(self, inventory: Inventory) -> NukeOutcome:
        """Attempt every batch and return the outcome without raising."""
        batches = inventory.batches()
        collector = ResultCollector()

        if batches:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(batches))) as executor:
                future_map = {executor.submit(self._delete_batch, batch): batch for batch in batches}
                for future in as_completed(future_map):
                    batch = future_map[future]
                    collector.add_records(batch.kind, batch.region, future.result())

        outcome = collector.outcome()
        logger.info(
            f"Nuked {outcome.succeeded_count} of {outcome.attempted_count} resource(s), "
            f"{outcome.failed_count} failed"
        )
        return outcome

    def _delete_batch(self, batch: Batch) -> List[DeletionRecord]:
        """Run one delete call; never raises."""
        logger.info(f"Nuking {len(batch.resources)} {batch.kind} resource(s) in {batch.region}")

        try:
            adapter = self.registry.get(batch.kind)
            errors: Dict[str, str] = adapter.delete(batch.region, batch.identifiers)
        except Exception as e:
            logger.error(f"Batch {batch.kind} in {batch.region} failed: {e}")
            errors = {identifier: str(e) or e.__class__.__name__ for identifier in batch.identifiers}

        unknown = set(errors) - set(batch.identifiers)
        if unknown:
            logger.warning(f"Adapter {batch.kind} reported errors for unknown identifiers: {sorted(unknown)}")

        timestamp = utcnow()
        records = []
        for resource in batch.resources:
            if resource.identifier in errors:
                records.append(
                    DeletionRecord(
                        resource=resource,
                        status=DeletionStatus.FAILED,
                        error_message=errors[resource.identifier] or "unknown error",
                        timestamp=timestamp,
                    )
                )
            else:
                records.append(DeletionRecord(resource=resource, status=DeletionStatus.SUCCEEDED, timestamp=timestamp))
        return records
