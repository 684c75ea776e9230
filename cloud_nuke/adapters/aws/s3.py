"""S3 bucket adapter.

Bucket listing is global: one list_buckets call returns every bucket, and
each bucket's native region is resolved with get_bucket_location so region
exclusions still apply.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from botocore.exceptions import ClientError

from ...errors import ListingError
from ...models.resource import ResourceDescriptor
from .base import AwsResourceAdapter, client_error_message
from .client import DEFAULT_REGION, create_boto_resource

# Legacy location constraints returned by get_bucket_location
_LEGACY_LOCATIONS = {None: "us-east-1", "": "us-east-1", "EU": "eu-west-1"}


def bucket_region(location_constraint: Optional[str]) -> str:
    if location_constraint in _LEGACY_LOCATIONS:
        return _LEGACY_LOCATIONS[location_constraint]
    return location_constraint  # type: ignore[return-value]


class S3BucketAdapter(AwsResourceAdapter):
    """S3 buckets, emptied (all object versions) before deletion."""

    @property
    def kind(self) -> str:
        return "s3"

    @property
    def service_name(self) -> str:
        return "s3"

    @property
    def is_global(self) -> bool:
        return True

    def list(self, region: str) -> List[ResourceDescriptor]:
        client = self._create_client(DEFAULT_REGION)
        resources = []
        unresolved = []

        response = client.list_buckets()
        for bucket in response.get("Buckets", []):
            name = bucket["Name"]
            try:
                location = client.get_bucket_location(Bucket=name).get("LocationConstraint")
            except ClientError as e:
                self.logger.warning(f"Cannot resolve region of bucket {name}: {client_error_message(e)}")
                unresolved.append(f"{name} ({client_error_message(e)})")
                continue

            resources.append(
                ResourceDescriptor(
                    kind=self.kind,
                    region=bucket_region(location),
                    identifier=name,
                    name=name,
                    created_at=bucket.get("CreationDate"),
                )
            )

        if unresolved:
            raise ListingError(
                self.kind, f"could not resolve the region of {len(unresolved)} bucket(s): {', '.join(unresolved)}"
            )

        self.logger.debug(f"Found {len(resources)} S3 buckets")
        return resources

    def delete(self, region: str, identifiers: Sequence[str]) -> Dict[str, str]:
        s3 = create_boto_resource("s3", region, self.profile_name)

        def empty_and_delete(name: str) -> None:
            bucket = s3.Bucket(name)
            bucket.object_versions.delete()
            bucket.objects.all().delete()
            bucket.delete()

        return self._delete_each(region, identifiers, empty_and_delete)
