"""Discovery orchestration across resource kinds and regions."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from ..adapters.base import AdapterRegistry, ResourceAdapter
from ..models.inventory import Inventory
from ..models.outcome import DiscoveryFailure
from ..models.resource import GLOBAL_REGION, ResourceDescriptor
from .collector import ResultCollector
from .filters import FilterEngine

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 10


@dataclass
class DiscoveryResult:
    """Filtered inventory plus the listing units that failed."""

    inventory: Inventory
    failures: List[DiscoveryFailure] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)


class DiscoveryOrchestrator:
    """Lists every registered kind in every in-scope region.

    Regional adapters are listed once per in-scope region; global adapters
    are listed exactly once and their resources are placed under the native
    region each one reports. A failing (kind, region) unit is recorded and
    never touches other units' results.
    """

    def __init__(
        self,
        registry: AdapterRegistry,
        filter_engine: FilterEngine,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.registry = registry
        self.filter_engine = filter_engine
        self.max_workers = max_workers

    def units(self) -> List[Tuple[ResourceAdapter, str]]:
        """(adapter, region) pairs to list, in a stable order."""
        regions = self.filter_engine.scope.sorted_regions()
        units = [(adapter, region) for adapter in self.registry.regional() for region in regions]
        units.extend((adapter, GLOBAL_REGION) for adapter in self.registry.global_())
        return units

    def discover(self) -> DiscoveryResult:
        """Run every listing unit and build the filtered inventory."""
        units = self.units()
        collector = ResultCollector()
        logger.debug(f"Listing {len(units)} (kind, region) unit(s) with {self.max_workers} worker(s)")

        if units:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(units))) as executor:
                future_map = {executor.submit(adapter.list, region): (adapter, region) for adapter, region in units}
                for future in as_completed(future_map):
                    adapter, region = future_map[future]
                    try:
                        descriptors = future.result()
                    except Exception as e:
                        logger.error(f"Failed to list {adapter.kind} in {region}: {e}")
                        collector.add_discovery_failure(DiscoveryFailure(kind=adapter.kind, region=region, message=str(e)))
                        continue
                    self._collect(collector, adapter, region, descriptors)

        result = DiscoveryResult(inventory=collector.inventory(), failures=collector.discovery_failures())
        logger.debug(f"Discovered {result.inventory.count} resource(s), {len(result.failures)} failed unit(s)")
        return result

    def _collect(
        self,
        collector: ResultCollector,
        adapter: ResourceAdapter,
        region: str,
        descriptors: List[ResourceDescriptor],
    ) -> None:
        included = self.filter_engine.apply(descriptors)

        if adapter.is_global:
            by_region: Dict[str, List[ResourceDescriptor]] = {}
            for descriptor in included:
                by_region.setdefault(descriptor.region, []).append(descriptor)
            for native_region, resources in by_region.items():
                collector.add_unit(adapter.kind, native_region, resources)
            return

        resources = []
        for descriptor in included:
            if descriptor.region != region:
                logger.warning(f"Dropping {descriptor.label()}: listed from {region} but reports another region")
                continue
            resources.append(descriptor)
        collector.add_unit(adapter.kind, region, resources)
