"""Load balancer adapters (Classic ELB and ELBv2)."""

from __future__ import annotations

from typing import Dict, List, Sequence

from ...models.resource import ResourceDescriptor
from .base import AwsResourceAdapter


class ClassicLoadBalancerAdapter(AwsResourceAdapter):
    """Classic Elastic Load Balancers, identified by name."""

    @property
    def kind(self) -> str:
        return "elb"

    @property
    def service_name(self) -> str:
        return "elb"

    def list(self, region: str) -> List[ResourceDescriptor]:
        client = self._create_client(region)
        resources = []

        paginator = client.get_paginator("describe_load_balancers")
        for page in paginator.paginate():
            for lb in page.get("LoadBalancerDescriptions", []):
                name = lb["LoadBalancerName"]
                resources.append(
                    ResourceDescriptor(
                        kind=self.kind,
                        region=region,
                        identifier=name,
                        name=name,
                        created_at=lb.get("CreatedTime"),
                    )
                )

        self.logger.debug(f"Found {len(resources)} classic load balancers in {region}")
        return resources

    def delete(self, region: str, identifiers: Sequence[str]) -> Dict[str, str]:
        client = self._create_client(region)
        return self._delete_each(
            region,
            identifiers,
            lambda name: client.delete_load_balancer(LoadBalancerName=name),
        )


class LoadBalancerV2Adapter(AwsResourceAdapter):
    """Application, network and gateway load balancers, identified by ARN."""

    @property
    def kind(self) -> str:
        return "elbv2"

    @property
    def service_name(self) -> str:
        return "elbv2"

    def list(self, region: str) -> List[ResourceDescriptor]:
        client = self._create_client(region)
        resources = []

        paginator = client.get_paginator("describe_load_balancers")
        for page in paginator.paginate():
            for lb in page.get("LoadBalancers", []):
                resources.append(
                    ResourceDescriptor(
                        kind=self.kind,
                        region=region,
                        identifier=lb["LoadBalancerArn"],
                        name=lb.get("LoadBalancerName"),
                        created_at=lb.get("CreatedTime"),
                    )
                )

        self.logger.debug(f"Found {len(resources)} v2 load balancers in {region}")
        return resources

    def delete(self, region: str, identifiers: Sequence[str]) -> Dict[str, str]:
        client = self._create_client(region)
        return self._delete_each(
            region,
            identifiers,
            lambda arn: client.delete_load_balancer(LoadBalancerArn=arn),
        )
