"""Data models for nuke runs."""

from __future__ import annotations

from .inventory import Batch, Inventory
from .outcome import DeletionRecord, DeletionStatus, DiscoveryFailure, NukeOutcome
from .resource import GLOBAL_REGION, ResourceDescriptor
from .run import NukeRun, RunState
from .scope import AgeCutoff, Scope, UndatedPolicy

__all__ = [
    "AgeCutoff",
    "Batch",
    "DeletionRecord",
    "DeletionStatus",
    "DiscoveryFailure",
    "GLOBAL_REGION",
    "Inventory",
    "NukeOutcome",
    "NukeRun",
    "ResourceDescriptor",
    "RunState",
    "Scope",
    "UndatedPolicy",
]
