"""AWS resource adapters."""

from __future__ import annotations

from typing import Optional

from ..base import AdapterRegistry
from .autoscaling import AutoScalingGroupAdapter
from .client import get_all_regions
from .ec2 import AmiAdapter, EbsSnapshotAdapter, EbsVolumeAdapter, Ec2InstanceAdapter, ElasticIpAdapter
from .elb import ClassicLoadBalancerAdapter, LoadBalancerV2Adapter
from .s3 import S3BucketAdapter

__all__ = [
    "AmiAdapter",
    "AutoScalingGroupAdapter",
    "ClassicLoadBalancerAdapter",
    "EbsSnapshotAdapter",
    "EbsVolumeAdapter",
    "Ec2InstanceAdapter",
    "ElasticIpAdapter",
    "LoadBalancerV2Adapter",
    "S3BucketAdapter",
    "build_registry",
    "get_all_regions",
]


def build_registry(profile_name: Optional[str] = None) -> AdapterRegistry:
    """Registry of every supported AWS resource kind."""
    return AdapterRegistry(
        [
            AutoScalingGroupAdapter(profile_name),
            ClassicLoadBalancerAdapter(profile_name),
            LoadBalancerV2Adapter(profile_name),
            Ec2InstanceAdapter(profile_name),
            EbsVolumeAdapter(profile_name),
            AmiAdapter(profile_name),
            EbsSnapshotAdapter(profile_name),
            ElasticIpAdapter(profile_name),
            S3BucketAdapter(profile_name),
        ]
    )
