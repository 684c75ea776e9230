"""Base class and registry for resource adapters."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterator, List, Sequence

from ..models.resource import ResourceDescriptor


class ResourceAdapter(ABC):
    """List and delete capability for one resource kind.

    Each adapter should:
    1. Have a unique kind name
    2. Declare whether its listing call is global or regional
    3. Implement list() to return descriptors reporting their native region
    4. Implement delete() to accept a batch of identifiers from one region
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    @abstractmethod
    def kind(self) -> str:
        """Unique resource kind name (e.g., "ec2")."""

    @property
    def is_global(self) -> bool:
        """True when list() is called once per run instead of once per region."""
        return False

    @abstractmethod
    def list(self, region: str) -> List[ResourceDescriptor]:
        """List candidate resources.

        Args:
            region: Region to list, or GLOBAL_REGION for global kinds

        Returns:
            Descriptors of every resource found

        Raises:
            Exception: Any listing failure; the caller isolates it to this unit
        """

    @abstractmethod
    def delete(self, region: str, identifiers: Sequence[str]) -> Dict[str, str]:
        """Delete a batch of resources from one region.

        Args:
            region: Region the resources live in
            identifiers: Identifiers previously returned by list()

        Returns:
            Mapping of identifier to error message for every identifier that
            failed (empty when all succeeded)

        Raises:
            Exception: A failure of the whole batch
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.kind!r})"


class AdapterRegistry:
    """Registry of resource adapters keyed by kind name.

    Adding a resource kind means registering one adapter; the orchestrators
    never change.
    """

    def __init__(self, adapters: Sequence[ResourceAdapter] = ()) -> None:
        self._adapters: Dict[str, ResourceAdapter] = {}
        for adapter in adapters:
            self.register(adapter)

    def register(self, adapter: ResourceAdapter) -> None:
        """Register an adapter.

        Raises:
            ValueError: If an adapter for the same kind is already registered
        """
        if adapter.kind in self._adapters:
            raise ValueError(f"Adapter already registered for kind '{adapter.kind}'")
        self._adapters[adapter.kind] = adapter

    def get(self, kind: str) -> ResourceAdapter:
        """Look up an adapter by kind.

        Raises:
            KeyError: If no adapter is registered for the kind
        """
        try:
            return self._adapters[kind]
        except KeyError:
            raise KeyError(f"No adapter registered for kind '{kind}'")

    def kinds(self) -> List[str]:
        return sorted(self._adapters)

    def regional(self) -> List[ResourceAdapter]:
        return [self._adapters[k] for k in self.kinds() if not self._adapters[k].is_global]

    def global_(self) -> List[ResourceAdapter]:
        return [self._adapters[k] for k in self.kinds() if self._adapters[k].is_global]

    def __iter__(self) -> Iterator[ResourceAdapter]:
        return iter(self._adapters[k] for k in self.kinds())

    def __len__(self) -> int:
        return len(self._adapters)

    def __contains__(self, kind: object) -> bool:
        return kind in self._adapters
