"""Error taxonomy for nuke runs.

Validation errors (scope, duration) are raised before any discovery happens.
Deletion failures are collected per resource and only surface in aggregate,
through NukeFailedError, after every batch has been attempted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List

if TYPE_CHECKING:
    from cloud_nuke.models.outcome import DiscoveryFailure, NukeOutcome
    from cloud_nuke.models.resource import ResourceDescriptor


class CloudNukeError(Exception):
    """Base class for all cloud-nuke errors."""


class InvalidScopeError(CloudNukeError):
    """An excluded region is not part of the provider's known regions."""

    def __init__(self, value: str, valid_regions: Iterable[str] = ()) -> None:
        self.value = value
        self.valid_regions = sorted(valid_regions)
        super().__init__(f"Invalid value for --exclude-region: '{value}' is not a known region")


class DurationParseError(CloudNukeError):
    """The --older-than value is not a valid duration."""

    def __init__(self, value: str, reason: str = "") -> None:
        self.value = value
        message = f"Invalid duration '{value}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class DiscoveryError(CloudNukeError):
    """One or more (kind, region) listing calls failed."""

    def __init__(self, failures: List["DiscoveryFailure"]) -> None:
        self.failures = list(failures)
        lines = [f"  * {f.kind} in {f.region}: {f.message}" for f in self.failures]
        super().__init__(f"Failed to list resources in {len(self.failures)} unit(s):\n" + "\n".join(lines))


class ListingError(CloudNukeError):
    """A listing call completed but could not describe every resource it found."""

    def __init__(self, kind: str, message: str) -> None:
        self.kind = kind
        self.message = message
        super().__init__(f"{kind}: {message}")


class DeletionError(CloudNukeError):
    """A single resource could not be deleted."""

    def __init__(self, descriptor: "ResourceDescriptor", message: str) -> None:
        self.descriptor = descriptor
        self.message = message
        super().__init__(f"{descriptor.label()}: {message}")


class NukeFailedError(CloudNukeError):
    """Aggregate error listing every resource that failed to delete."""

    def __init__(self, outcome: "NukeOutcome") -> None:
        self.outcome = outcome
        self.errors = [DeletionError(descriptor, message) for descriptor, message in outcome.failures]
        lines = [f"  * {error}" for error in self.errors]
        super().__init__(
            f"{len(self.errors)} of {outcome.attempted_count} resource(s) failed to nuke:\n" + "\n".join(lines)
        )


class ConfirmationError(CloudNukeError):
    """The confirmation answer could not be read."""
