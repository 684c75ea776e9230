"""boto3 client factory and region enumeration."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import boto3

logger = logging.getLogger(__name__)

# Region used for calls that are not tied to a region (describe_regions, list_buckets)
DEFAULT_REGION = "us-east-1"


def create_boto_session(profile_name: Optional[str] = None) -> boto3.Session:
    """Create a boto3 session.

    Sessions are not thread-safe, so each unit of work builds its own.
    """
    if profile_name:
        return boto3.Session(profile_name=profile_name)
    return boto3.Session()


def create_boto_client(service_name: str, region_name: str, profile_name: Optional[str] = None) -> Any:
    """Create a boto3 client for a service in a region.

    Args:
        service_name: AWS service name (e.g., "ec2")
        region_name: AWS region
        profile_name: AWS profile name (optional)

    Returns:
        boto3 client
    """
    session = create_boto_session(profile_name)
    return session.client(service_name, region_name=region_name)


def create_boto_resource(service_name: str, region_name: str, profile_name: Optional[str] = None) -> Any:
    """Create a boto3 resource for a service in a region."""
    session = create_boto_session(profile_name)
    return session.resource(service_name, region_name=region_name)


def get_all_regions(profile_name: Optional[str] = None) -> List[str]:
    """Return every region enabled for the account, sorted.

    Args:
        profile_name: AWS profile name (optional)

    Returns:
        Sorted list of region names
    """
    client = create_boto_client("ec2", DEFAULT_REGION, profile_name)
    response = client.describe_regions(
        Filters=[{"Name": "opt-in-status", "Values": ["opt-in-not-required", "opted-in"]}]
    )
    regions = sorted(region["RegionName"] for region in response.get("Regions", []))
    logger.debug(f"Found {len(regions)} enabled AWS regions")
    return regions
