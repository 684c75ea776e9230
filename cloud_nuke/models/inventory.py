"""Inventory model: discovered resources grouped by kind and region."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

from .resource import ResourceDescriptor


@dataclass(frozen=True)
class Batch:
    """All resources of one (kind, region) unit, submitted to one delete call."""

    kind: str
    region: str
    resources: Tuple[ResourceDescriptor, ...]

    @property
    def identifiers(self) -> List[str]:
        return [r.identifier for r in self.resources]


@dataclass
class Inventory:
    """Resources discovered in one run.

    Units are keyed by (kind, region). A unit is either present with its full
    listing or absent; it is never partially updated. Iteration order is
    sorted by kind then region, with discovery order kept inside each unit, so
    identical inputs always render identically.
    """

    units: Dict[Tuple[str, str], Tuple[ResourceDescriptor, ...]] = field(default_factory=dict)

    def add_unit(self, kind: str, region: str, resources: List[ResourceDescriptor]) -> None:
        if not resources:
            return
        key = (kind, region)
        if key in self.units:
            raise ValueError(f"Unit {kind}/{region} already present in inventory")
        self.units[key] = tuple(resources)

    def batches(self) -> List[Batch]:
        return [
            Batch(kind=kind, region=region, resources=self.units[(kind, region)])
            for kind, region in sorted(self.units)
        ]

    def resources(self) -> List[ResourceDescriptor]:
        return [resource for batch in self.batches() for resource in batch.resources]

    def by_region(self) -> Dict[str, Dict[str, List[ResourceDescriptor]]]:
        """Group resources as {region: {kind: [descriptors]}}, regions sorted."""
        grouped: Dict[str, Dict[str, List[ResourceDescriptor]]] = {}
        for kind, region in sorted(self.units, key=lambda key: (key[1], key[0])):
            grouped.setdefault(region, {})[kind] = list(self.units[(kind, region)])
        return grouped

    def kinds(self) -> List[str]:
        return sorted({kind for kind, _ in self.units})

    def regions(self) -> List[str]:
        return sorted({region for _, region in self.units})

    @property
    def count(self) -> int:
        return sum(len(resources) for resources in self.units.values())

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    def __iter__(self) -> Iterator[ResourceDescriptor]:
        return iter(self.resources())

    def __len__(self) -> int:
        return self.count
