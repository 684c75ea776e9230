"""Discovery failure and deletion outcome models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .resource import ResourceDescriptor


@dataclass(frozen=True)
class DiscoveryFailure:
    """A (kind, region) listing call that failed."""

    kind: str
    region: str
    message: str


class DeletionStatus(Enum):
    """Individual resource deletion status."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class DeletionRecord:
    """Result of one resource deletion attempt.

    Validation rules:
        - status=succeeded: no error_message
        - status=failed: requires error_message
    """

    resource: ResourceDescriptor
    status: DeletionStatus
    error_message: Optional[str] = None
    timestamp: Optional[datetime] = None

    def validate(self) -> bool:
        """Validate record invariants.

        Raises:
            ValueError: If any validation rule fails
        """
        if self.status == DeletionStatus.FAILED and not self.error_message:
            raise ValueError("Failed status requires error_message")
        if self.status == DeletionStatus.SUCCEEDED and self.error_message:
            raise ValueError("Succeeded status cannot have an error message")
        return True

    @property
    def succeeded(self) -> bool:
        return self.status == DeletionStatus.SUCCEEDED

    def to_dict(self) -> Dict[str, Any]:
        data = self.resource.to_dict()
        data["status"] = self.status.value
        data["error_message"] = self.error_message
        data["timestamp"] = self.timestamp.isoformat() if self.timestamp else None
        return data


@dataclass
class NukeOutcome:
    """Aggregate result of the deletion phase.

    Every attempted resource has exactly one record; a failed resource is
    never dropped from the report.
    """

    records: List[DeletionRecord] = field(default_factory=list)

    @property
    def attempted_count(self) -> int:
        return len(self.records)

    @property
    def succeeded_count(self) -> int:
        return sum(1 for r in self.records if r.succeeded)

    @property
    def failed_count(self) -> int:
        return self.attempted_count - self.succeeded_count

    @property
    def failures(self) -> List[Tuple[ResourceDescriptor, str]]:
        return [(r.resource, r.error_message or "unknown error") for r in self.records if not r.succeeded]

    @property
    def has_failures(self) -> bool:
        return self.failed_count > 0
