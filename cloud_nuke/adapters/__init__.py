"""Resource adapters: per-kind list and delete capabilities."""

from __future__ import annotations

from .base import AdapterRegistry, ResourceAdapter

__all__ = ["AdapterRegistry", "ResourceAdapter"]
