"""Shared behaviour for AWS resource adapters."""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Callable, Dict, Optional, Sequence

from botocore.exceptions import ClientError

from ..base import ResourceAdapter
from .client import create_boto_client

# Error codes meaning the resource is already gone
NOT_FOUND_CODES = frozenset(
    [
        "InvalidInstanceID.NotFound",
        "InvalidVolume.NotFound",
        "InvalidSnapshot.NotFound",
        "InvalidAMIID.NotFound",
        "InvalidAMIID.Unavailable",
        "InvalidAllocationID.NotFound",
        "InvalidAddress.NotFound",
        "LoadBalancerNotFound",
        "NoSuchBucket",
        "NoSuchEntity",
        "ResourceNotFoundException",
    ]
)


def client_error_message(error: ClientError) -> str:
    """Render a ClientError as "<Code>: <Message>"."""
    error_code = error.response.get("Error", {}).get("Code", "Unknown")
    error_message = error.response.get("Error", {}).get("Message", str(error))
    return f"{error_code}: {error_message}"


def client_error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "Unknown")


class AwsResourceAdapter(ResourceAdapter):
    """Base class for AWS adapters backed by one boto3 service."""

    def __init__(self, profile_name: Optional[str] = None) -> None:
        super().__init__()
        self.profile_name = profile_name

    @property
    @abstractmethod
    def service_name(self) -> str:
        """boto3 service name (e.g., "ec2")."""

    def _create_client(self, region: str) -> Any:
        return create_boto_client(
            service_name=self.service_name,
            region_name=region,
            profile_name=self.profile_name,
        )

    def _delete_each(
        self,
        region: str,
        identifiers: Sequence[str],
        delete_one: Callable[[str], Any],
    ) -> Dict[str, str]:
        """Call delete_one for every identifier, collecting per-identifier errors.

        A "not found" error counts as success because the resource is gone.
        """
        errors: Dict[str, str] = {}

        for identifier in identifiers:
            try:
                delete_one(identifier)
                self.logger.info(f"Deleted {self.kind} {identifier} in {region}")
            except ClientError as e:
                if client_error_code(e) in NOT_FOUND_CODES:
                    self.logger.info(f"{self.kind} {identifier} in {region} already deleted")
                    continue
                errors[identifier] = client_error_message(e)
                self.logger.error(f"Failed to delete {self.kind} {identifier} in {region}: {errors[identifier]}")
            except Exception as e:
                errors[identifier] = f"Unexpected error: {e}"
                self.logger.error(f"Failed to delete {self.kind} {identifier} in {region}: {e}")

        return errors
