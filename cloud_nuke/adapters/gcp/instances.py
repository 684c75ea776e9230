"""Compute Engine instance adapter."""

from __future__ import annotations

import re
from typing import Dict, List, Sequence, Tuple

from google.api_core.exceptions import GoogleAPICallError, NotFound

from ...models.resource import ResourceDescriptor
from ...utils.timeutil import parse_timestamp
from ..base import ResourceAdapter
from .context import GcpContext

_IDENTIFIER_RE = re.compile(r"^zones/(?P<zone>[^/]+)/instances/(?P<name>[^/]+)$")

# Seconds to wait for one delete operation to finish
DELETE_TIMEOUT = 300


def instance_identifier(zone: str, name: str) -> str:
    """Relative resource name, unique within the project."""
    return f"zones/{zone}/instances/{name}"


def parse_instance_identifier(identifier: str) -> Tuple[str, str]:
    """Split an identifier into (zone, name).

    Raises:
        ValueError: If the identifier is not a zonal instance name
    """
    match = _IDENTIFIER_RE.match(identifier)
    if not match:
        raise ValueError(f"Invalid GCE instance identifier: {identifier}")
    return match.group("zone"), match.group("name")


class GceInstanceAdapter(ResourceAdapter):
    """GCE instances across every zone of a region."""

    def __init__(self, context: GcpContext) -> None:
        super().__init__()
        self.context = context

    @property
    def kind(self) -> str:
        return "gce-instance"

    def list(self, region: str) -> List[ResourceDescriptor]:
        client = self.context.instances_client()
        resources = []

        for zone in self.context.zones(region):
            for instance in client.list(project=self.context.project, zone=zone):
                resources.append(
                    ResourceDescriptor(
                        kind=self.kind,
                        region=region,
                        identifier=instance_identifier(zone, instance.name),
                        name=instance.name,
                        zone=zone,
                        created_at=parse_timestamp(instance.creation_timestamp),
                    )
                )

        self.logger.debug(f"Found {len(resources)} GCE instances in {region}")
        return resources

    def delete(self, region: str, identifiers: Sequence[str]) -> Dict[str, str]:
        client = self.context.instances_client()
        errors: Dict[str, str] = {}

        for identifier in identifiers:
            try:
                zone, name = parse_instance_identifier(identifier)
                operation = client.delete(project=self.context.project, zone=zone, instance=name)
                operation.result(timeout=DELETE_TIMEOUT)
                self.logger.info(f"Deleted GCE instance {name} in {zone}")
            except NotFound:
                self.logger.info(f"GCE instance {identifier} already deleted")
            except (GoogleAPICallError, ValueError) as e:
                errors[identifier] = str(e)
                self.logger.error(f"Failed to delete GCE instance {identifier}: {e}")
            except Exception as e:
                errors[identifier] = f"Unexpected error: {e}"
                self.logger.error(f"Failed to delete GCE instance {identifier}: {e}")

        return errors
