"""Auto Scaling group adapter."""

from __future__ import annotations

from typing import Dict, List, Sequence

from ...models.resource import ResourceDescriptor
from .base import AwsResourceAdapter


class AutoScalingGroupAdapter(AwsResourceAdapter):
    """Auto Scaling groups, force-deleted together with their instances."""

    @property
    def kind(self) -> str:
        return "asg"

    @property
    def service_name(self) -> str:
        return "autoscaling"

    def list(self, region: str) -> List[ResourceDescriptor]:
        client = self._create_client(region)
        resources = []

        paginator = client.get_paginator("describe_auto_scaling_groups")
        for page in paginator.paginate():
            for group in page.get("AutoScalingGroups", []):
                name = group["AutoScalingGroupName"]
                resources.append(
                    ResourceDescriptor(
                        kind=self.kind,
                        region=region,
                        identifier=name,
                        name=name,
                        created_at=group.get("CreatedTime"),
                    )
                )

        self.logger.debug(f"Found {len(resources)} Auto Scaling groups in {region}")
        return resources

    def delete(self, region: str, identifiers: Sequence[str]) -> Dict[str, str]:
        client = self._create_client(region)
        return self._delete_each(
            region,
            identifiers,
            lambda name: client.delete_auto_scaling_group(AutoScalingGroupName=name, ForceDelete=True),
        )
