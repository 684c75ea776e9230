"""Discovery, filtering, confirmation and deletion of cloud resources.

Classes:
    NukeRunner: Drives one run through its states
    ScopeResolver: Validates region exclusions
    FilterEngine: Region and age filtering
    DiscoveryOrchestrator: Concurrent listing across kinds and regions
    DeletionOrchestrator: Concurrent batch deletion with aggregated failures
    AuditStorage: Run log storage and retrieval
"""

from __future__ import annotations

__all__ = [
    "NukeRunner",
    "ScopeResolver",
    "FilterEngine",
    "DiscoveryOrchestrator",
    "DeletionOrchestrator",
    "AuditStorage",
]
