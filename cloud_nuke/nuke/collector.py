"""Thread-safe collection point for concurrent discovery and deletion units."""

from __future__ import annotations

import threading
from typing import Dict, List, Tuple

from ..models.inventory import Inventory
from ..models.outcome import DeletionRecord, DiscoveryFailure, NukeOutcome
from ..models.resource import ResourceDescriptor


class ResultCollector:
    """Merges results from worker threads.

    Every write takes the lock, so units finishing at the same time never
    race on the shared structures. Readers get ordered copies.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._inventory = Inventory()
        self._discovery_failures: List[DiscoveryFailure] = []
        self._records: Dict[Tuple[str, str], List[DeletionRecord]] = {}

    def add_unit(self, kind: str, region: str, resources: List[ResourceDescriptor]) -> None:
        with self._lock:
            self._inventory.add_unit(kind, region, resources)

    def add_discovery_failure(self, failure: DiscoveryFailure) -> None:
        with self._lock:
            self._discovery_failures.append(failure)

    def add_records(self, kind: str, region: str, records: List[DeletionRecord]) -> None:
        with self._lock:
            self._records.setdefault((kind, region), []).extend(records)

    def inventory(self) -> Inventory:
        with self._lock:
            return Inventory(units=dict(self._inventory.units))

    def discovery_failures(self) -> List[DiscoveryFailure]:
        with self._lock:
            return sorted(self._discovery_failures, key=lambda f: (f.kind, f.region))

    def outcome(self) -> NukeOutcome:
        with self._lock:
            return NukeOutcome(records=[record for key in sorted(self._records) for record in self._records[key]])
