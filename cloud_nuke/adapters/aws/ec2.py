"""EC2 adapters: instances, EBS volumes, EBS snapshots, AMIs and Elastic IPs."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from botocore.exceptions import ClientError

from ...models.resource import ResourceDescriptor
from ...utils.timeutil import parse_timestamp
from .base import NOT_FOUND_CODES, AwsResourceAdapter, client_error_code


def _name_tag(tags: Optional[List[Dict[str, str]]]) -> Optional[str]:
    for tag in tags or []:
        if tag.get("Key") == "Name":
            return tag.get("Value")
    return None


class _Ec2Adapter(AwsResourceAdapter):
    @property
    def service_name(self) -> str:
        return "ec2"


class Ec2InstanceAdapter(_Ec2Adapter):
    """EC2 instances that are not already shutting down or terminated."""

    ACTIVE_STATES = ["pending", "running", "stopping", "stopped"]

    @property
    def kind(self) -> str:
        return "ec2"

    def list(self, region: str) -> List[ResourceDescriptor]:
        client = self._create_client(region)
        resources = []

        paginator = client.get_paginator("describe_instances")
        pages = paginator.paginate(Filters=[{"Name": "instance-state-name", "Values": self.ACTIVE_STATES}])
        for page in pages:
            for reservation in page.get("Reservations", []):
                for instance in reservation.get("Instances", []):
                    resources.append(
                        ResourceDescriptor(
                            kind=self.kind,
                            region=region,
                            identifier=instance["InstanceId"],
                            name=_name_tag(instance.get("Tags")),
                            zone=instance.get("Placement", {}).get("AvailabilityZone"),
                            created_at=instance.get("LaunchTime"),
                        )
                    )

        self.logger.debug(f"Found {len(resources)} EC2 instances in {region}")
        return resources

    def delete(self, region: str, identifiers: Sequence[str]) -> Dict[str, str]:
        """Terminate the whole batch with one call.

        EC2 rejects the entire call when any instance ID no longer exists. In
        that case every instance is terminated on its own so the ones already
        gone count as deleted. Any other ClientError fails the batch; instances
        missing from the response are reported individually.
        """
        if not identifiers:
            return {}

        client = self._create_client(region)
        try:
            response = client.terminate_instances(InstanceIds=list(identifiers))
        except ClientError as e:
            if client_error_code(e) not in NOT_FOUND_CODES:
                raise
            self.logger.info(f"Batch terminate in {region} hit a missing instance, terminating one at a time")
            return self._delete_each(
                region, identifiers, lambda instance_id: client.terminate_instances(InstanceIds=[instance_id])
            )

        terminating = {item["InstanceId"] for item in response.get("TerminatingInstances", [])}
        errors = {
            instance_id: "Instance was not reported as terminating"
            for instance_id in identifiers
            if instance_id not in terminating
        }

        self.logger.info(f"Terminating {len(terminating)} EC2 instance(s) in {region}")
        return errors


class EbsVolumeAdapter(_Ec2Adapter):
    """EBS volumes."""

    @property
    def kind(self) -> str:
        return "ebs"

    def list(self, region: str) -> List[ResourceDescriptor]:
        client = self._create_client(region)
        resources = []

        paginator = client.get_paginator("describe_volumes")
        for page in paginator.paginate():
            for volume in page.get("Volumes", []):
                resources.append(
                    ResourceDescriptor(
                        kind=self.kind,
                        region=region,
                        identifier=volume["VolumeId"],
                        name=_name_tag(volume.get("Tags")),
                        zone=volume.get("AvailabilityZone"),
                        created_at=volume.get("CreateTime"),
                    )
                )

        self.logger.debug(f"Found {len(resources)} EBS volumes in {region}")
        return resources

    def delete(self, region: str, identifiers: Sequence[str]) -> Dict[str, str]:
        client = self._create_client(region)
        return self._delete_each(region, identifiers, lambda volume_id: client.delete_volume(VolumeId=volume_id))


class EbsSnapshotAdapter(_Ec2Adapter):
    """EBS snapshots owned by the account."""

    @property
    def kind(self) -> str:
        return "snap"

    def list(self, region: str) -> List[ResourceDescriptor]:
        client = self._create_client(region)
        resources = []

        paginator = client.get_paginator("describe_snapshots")
        for page in paginator.paginate(OwnerIds=["self"]):
            for snapshot in page.get("Snapshots", []):
                resources.append(
                    ResourceDescriptor(
                        kind=self.kind,
                        region=region,
                        identifier=snapshot["SnapshotId"],
                        name=_name_tag(snapshot.get("Tags")),
                        created_at=snapshot.get("StartTime"),
                    )
                )

        self.logger.debug(f"Found {len(resources)} EBS snapshots in {region}")
        return resources

    def delete(self, region: str, identifiers: Sequence[str]) -> Dict[str, str]:
        client = self._create_client(region)
        return self._delete_each(
            region,
            identifiers,
            lambda snapshot_id: client.delete_snapshot(SnapshotId=snapshot_id),
        )


class AmiAdapter(_Ec2Adapter):
    """Machine images owned by the account."""

    @property
    def kind(self) -> str:
        return "ami"

    def list(self, region: str) -> List[ResourceDescriptor]:
        client = self._create_client(region)
        resources = []

        paginator = client.get_paginator("describe_images")
        for page in paginator.paginate(Owners=["self"]):
            for image in page.get("Images", []):
                resources.append(
                    ResourceDescriptor(
                        kind=self.kind,
                        region=region,
                        identifier=image["ImageId"],
                        name=image.get("Name"),
                        # describe_images returns CreationDate as a string
                        created_at=parse_timestamp(image.get("CreationDate")),
                    )
                )

        self.logger.debug(f"Found {len(resources)} AMIs in {region}")
        return resources

    def delete(self, region: str, identifiers: Sequence[str]) -> Dict[str, str]:
        client = self._create_client(region)
        return self._delete_each(region, identifiers, lambda image_id: client.deregister_image(ImageId=image_id))


class ElasticIpAdapter(_Ec2Adapter):
    """Elastic IP addresses.

    The EC2 API does not report an allocation time, so these are undated and
    follow the configured undated policy.
    """

    @property
    def kind(self) -> str:
        return "eip"

    def list(self, region: str) -> List[ResourceDescriptor]:
        client = self._create_client(region)
        resources = []

        response = client.describe_addresses()
        for address in response.get("Addresses", []):
            allocation_id = address.get("AllocationId")
            if not allocation_id:
                self.logger.debug(f"Skipping EC2-Classic address {address.get('PublicIp')} in {region}")
                continue
            resources.append(
                ResourceDescriptor(
                    kind=self.kind,
                    region=region,
                    identifier=allocation_id,
                    name=address.get("PublicIp"),
                )
            )

        self.logger.debug(f"Found {len(resources)} Elastic IPs in {region}")
        return resources

    def delete(self, region: str, identifiers: Sequence[str]) -> Dict[str, str]:
        client = self._create_client(region)
        return self._delete_each(
            region,
            identifiers,
            lambda allocation_id: client.release_address(AllocationId=allocation_id),
        )
