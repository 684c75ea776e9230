"""Resource descriptor model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Region marker passed to adapters whose listing call is not regional.
GLOBAL_REGION = "global"


@dataclass(frozen=True)
class ResourceDescriptor:
    """A discovered cloud resource.

    Descriptors are immutable once discovered; the filter engine only keeps or
    drops them.

    Attributes:
        kind: Resource kind name (e.g., "ec2", "gce-instance")
        region: Region the resource lives in (native region, even for global kinds)
        identifier: Stable identifier passed to the adapter's delete call
        name: Optional human-readable name
        zone: Optional availability zone
        created_at: Creation/launch time, None when the provider does not report one
    """

    kind: str
    region: str
    identifier: str
    name: Optional[str] = None
    zone: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.created_at is not None and self.created_at.tzinfo is None:
            # Providers that return naive datetimes report UTC
            object.__setattr__(self, "created_at", self.created_at.replace(tzinfo=timezone.utc))

    @property
    def is_dated(self) -> bool:
        return self.created_at is not None

    def label(self) -> str:
        """Render the resource with enough context to find it manually."""
        text = f"{self.kind} {self.identifier}"
        if self.name and self.name != self.identifier:
            text += f" ({self.name})"
        location = self.region if not self.zone else f"{self.region}/{self.zone}"
        return f"{text} in {location}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "region": self.region,
            "identifier": self.identifier,
            "name": self.name,
            "zone": self.zone,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
