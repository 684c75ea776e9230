"""Nuke run model and state machine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from .outcome import DiscoveryFailure, NukeOutcome
from .scope import AgeCutoff, Scope


class RunState(Enum):
    """Run states.

    State transitions:
        idle → scoped → discovered → awaiting_confirmation → aborted
        idle → scoped → discovered → awaiting_confirmation → deleting → reported
        idle → scoped → discovered → reported (nothing to nuke, or a fatal listing failure)
    """

    IDLE = "idle"
    SCOPED = "scoped"
    DISCOVERED = "discovered"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    ABORTED = "aborted"
    DELETING = "deleting"
    REPORTED = "reported"


_TRANSITIONS = {
    RunState.IDLE: {RunState.SCOPED},
    RunState.SCOPED: {RunState.DISCOVERED},
    RunState.DISCOVERED: {RunState.AWAITING_CONFIRMATION, RunState.REPORTED},
    RunState.AWAITING_CONFIRMATION: {RunState.ABORTED, RunState.DELETING},
    RunState.DELETING: {RunState.REPORTED},
    RunState.ABORTED: set(),
    RunState.REPORTED: set(),
}


@dataclass
class NukeRun:
    """One invocation of the nuke flow.

    Attributes:
        run_id: Unique identifier for the run
        provider: Provider name ("aws", "gcp")
        started_at: When the run started (UTC)
        state: Current state
        scope: Validated scope (set once scoped)
        cutoff: Age cutoff (set once scoped)
        resource_count: Resources in the filtered inventory
        discovery_failures: Listing units that failed
        outcome: Deletion outcome (set once deletion ran)
        completed_at: When the run reached a terminal state
    """

    run_id: str
    provider: str
    started_at: datetime
    state: RunState = RunState.IDLE
    scope: Optional[Scope] = None
    cutoff: Optional[AgeCutoff] = None
    resource_count: int = 0
    discovery_failures: List[DiscoveryFailure] = field(default_factory=list)
    outcome: Optional[NukeOutcome] = None
    completed_at: Optional[datetime] = None

    def transition(self, new_state: RunState) -> None:
        """Move to a new state.

        Raises:
            ValueError: If the transition is not allowed
        """
        if new_state not in _TRANSITIONS[self.state]:
            raise ValueError(f"Invalid run state transition: {self.state.value} -> {new_state.value}")
        self.state = new_state

    @property
    def is_terminal(self) -> bool:
        return self.state in (RunState.ABORTED, RunState.REPORTED)

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds()

    def summary(self) -> Dict[str, Any]:
        outcome = self.outcome or NukeOutcome()
        return {
            "run_id": self.run_id,
            "provider": self.provider,
            "state": self.state.value,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration_seconds": self.duration_seconds,
            "regions": self.scope.sorted_regions() if self.scope else [],
            "excluded_regions": sorted(self.scope.excluded_regions) if self.scope else [],
            "cutoff": self.cutoff.instant.isoformat() if self.cutoff else None,
            "undated_policy": self.cutoff.undated_policy.value if self.cutoff else None,
            "resource_count": self.resource_count,
            "attempted_count": outcome.attempted_count,
            "succeeded_count": outcome.succeeded_count,
            "failed_count": outcome.failed_count,
        }
