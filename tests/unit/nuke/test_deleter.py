"""Tests for DeletionOrchestrator."""

from __future__ import annotations

from typing import List

import pytest

from cloud_nuke.adapters.base import AdapterRegistry
from cloud_nuke.errors import NukeFailedError
from cloud_nuke.models.inventory import Inventory
from cloud_nuke.models.outcome import DeletionStatus
from cloud_nuke.nuke.deleter import DeletionOrchestrator
from tests.fixtures.resources import FakeAdapter, create_descriptor


def build_inventory(units: List[tuple]) -> Inventory:
    inventory = Inventory()
    for kind, region, identifiers in units:
        inventory.add_unit(kind, region, [create_descriptor(i, kind=kind, region=region) for i in identifiers])
    return inventory


class TestDeletionOrchestrator:
    """Test suite for DeletionOrchestrator."""

    @pytest.fixture
    def inventory(self) -> Inventory:
        return build_inventory(
            [
                ("ec2", "us-east-1", ["i-1", "i-2"]),
                ("ec2", "us-west-2", ["i-3"]),
                ("ebs", "us-east-1", ["vol-1", "vol-2"]),
                ("ebs", "eu-west-1", ["vol-3"]),
            ]
        )

    def test_one_delete_call_per_batch(self, inventory: Inventory) -> None:
        """Test each (kind, region) unit is submitted as one batch."""
        ec2 = FakeAdapter("ec2")
        ebs = FakeAdapter("ebs")

        outcome = DeletionOrchestrator(AdapterRegistry([ec2, ebs])).nuke(inventory)

        assert sorted(ec2.delete_calls) == [("us-east-1", ["i-1", "i-2"]), ("us-west-2", ["i-3"])]
        assert sorted(ebs.delete_calls) == [("eu-west-1", ["vol-3"]), ("us-east-1", ["vol-1", "vol-2"])]
        assert outcome.attempted_count == 6
        assert outcome.succeeded_count == 6
        assert outcome.has_failures is False

    def test_batch_failure_does_not_stop_other_batches(self, inventory: Inventory) -> None:
        """Test N batches with M failing: all attempted, exactly M reported."""
        ec2 = FakeAdapter("ec2", batch_errors={"us-west-2": RuntimeError("throttled")})
        ebs = FakeAdapter("ebs", batch_errors={"eu-west-1": RuntimeError("access denied")})

        with pytest.raises(NukeFailedError) as exc_info:
            DeletionOrchestrator(AdapterRegistry([ec2, ebs])).nuke(inventory)

        outcome = exc_info.value.outcome
        assert len(ec2.delete_calls) + len(ebs.delete_calls) == 4
        assert outcome.attempted_count == 6
        assert sorted(d.identifier for d, _ in outcome.failures) == ["i-3", "vol-3"]
        assert outcome.succeeded_count == 4

    def test_aggregate_error_lists_every_failure(self, inventory: Inventory) -> None:
        """Test the aggregate error enumerates each failed resource, not just a count."""
        ec2 = FakeAdapter("ec2", delete_errors={"i-2": "IncorrectInstanceState: stuck"})
        ebs = FakeAdapter("ebs", delete_errors={"vol-3": "VolumeInUse: attached"})

        with pytest.raises(NukeFailedError) as exc_info:
            DeletionOrchestrator(AdapterRegistry([ec2, ebs])).nuke(inventory)

        message = str(exc_info.value)
        assert "2 of 6" in message
        assert "ec2 i-2 in us-east-1: IncorrectInstanceState: stuck" in message
        assert "ebs vol-3 in eu-west-1: VolumeInUse: attached" in message
        assert "i-1" not in message
        assert len(exc_info.value.errors) == 2

    def test_per_identifier_errors_only_fail_those_identifiers(self) -> None:
        """Test partial batch failure marks only the reported identifiers."""
        inventory = build_inventory([("ebs", "us-east-1", ["vol-1", "vol-2", "vol-3"])])
        ebs = FakeAdapter("ebs", delete_errors={"vol-2": "VolumeInUse: attached"})

        outcome = DeletionOrchestrator(AdapterRegistry([ebs])).execute(inventory)

        statuses = {r.resource.identifier: r.status for r in outcome.records}
        assert statuses == {
            "vol-1": DeletionStatus.SUCCEEDED,
            "vol-2": DeletionStatus.FAILED,
            "vol-3": DeletionStatus.SUCCEEDED,
        }

    def test_batch_exception_fails_every_identifier_in_batch(self) -> None:
        """Test a raised batch error is recorded for each resource in the batch."""
        inventory = build_inventory([("ec2", "us-east-1", ["i-1", "i-2"])])
        ec2 = FakeAdapter("ec2", batch_errors={"us-east-1": RuntimeError("UnauthorizedOperation")})

        outcome = DeletionOrchestrator(AdapterRegistry([ec2])).execute(inventory)

        assert outcome.failures == [
            (inventory.batches()[0].resources[0], "UnauthorizedOperation"),
            (inventory.batches()[0].resources[1], "UnauthorizedOperation"),
        ]

    def test_unregistered_kind_fails_its_batch_only(self, inventory: Inventory) -> None:
        """Test a missing adapter is a batch failure, not a run abort."""
        ec2 = FakeAdapter("ec2")

        outcome = DeletionOrchestrator(AdapterRegistry([ec2])).execute(inventory)

        assert sorted(d.identifier for d, _ in outcome.failures) == ["vol-1", "vol-2", "vol-3"]
        assert outcome.succeeded_count == 3

    def test_execute_does_not_raise(self, inventory: Inventory) -> None:
        """Test execute returns failures instead of raising."""
        ec2 = FakeAdapter("ec2", delete_errors={"i-1": "denied"})
        ebs = FakeAdapter("ebs")

        outcome = DeletionOrchestrator(AdapterRegistry([ec2, ebs])).execute(inventory)

        assert outcome.failed_count == 1

    def test_records_ordered_by_batch(self, inventory: Inventory) -> None:
        """Test outcome order is stable regardless of completion order."""
        registry = AdapterRegistry([FakeAdapter("ec2"), FakeAdapter("ebs")])

        outcome = DeletionOrchestrator(registry, max_workers=4).execute(inventory)

        assert [r.resource.identifier for r in outcome.records] == [r.identifier for r in inventory]

    def test_empty_inventory(self) -> None:
        """Test nothing is attempted for an empty inventory."""
        ec2 = FakeAdapter("ec2")

        outcome = DeletionOrchestrator(AdapterRegistry([ec2])).nuke(Inventory())

        assert outcome.attempted_count == 0
        assert ec2.delete_calls == []

    def test_invalid_max_workers(self) -> None:
        """Test the worker bound must be positive."""
        with pytest.raises(ValueError):
            DeletionOrchestrator(AdapterRegistry(), max_workers=0)
