"""GCP resource adapters."""

from __future__ import annotations

from ..base import AdapterRegistry
from .context import GcpContext
from .instances import GceInstanceAdapter

__all__ = ["GceInstanceAdapter", "GcpContext", "build_registry"]


def build_registry(context: GcpContext) -> AdapterRegistry:
    """Registry of every supported GCP resource kind."""
    return AdapterRegistry([GceInstanceAdapter(context)])
