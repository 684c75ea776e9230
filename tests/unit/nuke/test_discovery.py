"""Tests for DiscoveryOrchestrator."""

from __future__ import annotations

from datetime import timedelta
from unittest.mock import Mock

import pytest

from cloud_nuke.adapters.aws import AmiAdapter
from cloud_nuke.adapters.base import AdapterRegistry
from cloud_nuke.models.resource import GLOBAL_REGION
from cloud_nuke.nuke.discovery import DiscoveryOrchestrator
from cloud_nuke.nuke.duration import compute_cutoff
from cloud_nuke.nuke.filters import FilterEngine
from cloud_nuke.nuke.scope import ScopeResolver
from tests.fixtures.resources import NOW, REGIONS, FakeAdapter, create_descriptor


def build_engine(excluded=(), older_than: str = "0s") -> FilterEngine:
    scope = ScopeResolver().resolve(REGIONS, excluded)
    return FilterEngine(scope, compute_cutoff(older_than, now=NOW))


class TestDiscoveryOrchestrator:
    """Test suite for DiscoveryOrchestrator."""

    @pytest.fixture
    def ec2(self) -> FakeAdapter:
        return FakeAdapter(
            "ec2",
            resources={
                "us-east-1": [create_descriptor("i-1"), create_descriptor("i-2")],
                "us-west-2": [create_descriptor("i-3", region="us-west-2")],
            },
        )

    @pytest.fixture
    def s3(self) -> FakeAdapter:
        return FakeAdapter(
            "s3",
            is_global=True,
            resources={
                GLOBAL_REGION: [
                    create_descriptor("bucket-east", kind="s3", region="us-east-1"),
                    create_descriptor("bucket-west", kind="s3", region="us-west-2"),
                    create_descriptor("bucket-eu", kind="s3", region="eu-west-1"),
                ]
            },
        )

    def test_regional_adapter_listed_once_per_in_scope_region(self, ec2: FakeAdapter) -> None:
        """Test each regional kind is listed in every in-scope region exactly once."""
        DiscoveryOrchestrator(AdapterRegistry([ec2]), build_engine(excluded=["eu-west-1"])).discover()

        assert sorted(ec2.list_calls) == ["us-east-1", "us-west-2"]

    def test_global_adapter_listed_once(self, ec2: FakeAdapter, s3: FakeAdapter) -> None:
        """Test global kinds are listed once regardless of region count."""
        DiscoveryOrchestrator(AdapterRegistry([ec2, s3]), build_engine()).discover()

        assert s3.list_calls == [GLOBAL_REGION]
        assert len(ec2.list_calls) == len(REGIONS)

    def test_global_resources_grouped_by_native_region(self, s3: FakeAdapter) -> None:
        """Test global listings are split into per-region units."""
        result = DiscoveryOrchestrator(AdapterRegistry([s3]), build_engine()).discover()

        assert sorted(result.inventory.units) == [("s3", "eu-west-1"), ("s3", "us-east-1"), ("s3", "us-west-2")]

    def test_global_resources_in_excluded_region_dropped(self, s3: FakeAdapter) -> None:
        """Test region exclusion applies to global kinds via native region."""
        result = DiscoveryOrchestrator(AdapterRegistry([s3]), build_engine(excluded=["us-west-2"])).discover()

        assert [r.identifier for r in result.inventory] == ["bucket-eu", "bucket-east"]

    def test_global_adapter_listed_even_with_empty_scope(self, s3: FakeAdapter) -> None:
        """Test global listing happens even when every region is excluded."""
        result = DiscoveryOrchestrator(AdapterRegistry([s3]), build_engine(excluded=REGIONS)).discover()

        assert s3.list_calls == [GLOBAL_REGION]
        assert result.inventory.is_empty

    def test_filter_applied_before_inventory(self) -> None:
        """Test young resources never reach the inventory."""
        adapter = FakeAdapter(
            "ec2",
            resources={
                "us-east-1": [
                    create_descriptor("i-old", age=timedelta(minutes=15)),
                    create_descriptor("i-new", age=timedelta(minutes=5)),
                ]
            },
        )

        result = DiscoveryOrchestrator(AdapterRegistry([adapter]), build_engine(older_than="10m")).discover()

        assert [r.identifier for r in result.inventory] == ["i-old"]

    def test_failed_unit_is_isolated(self, ec2: FakeAdapter) -> None:
        """Test one failing region does not affect other units."""
        ec2.list_errors["us-west-2"] = RuntimeError("region unreachable")
        ebs = FakeAdapter("ebs", resources={"us-west-2": [create_descriptor("vol-1", kind="ebs", region="us-west-2")]})

        result = DiscoveryOrchestrator(AdapterRegistry([ec2, ebs]), build_engine()).discover()

        assert result.has_failures is True
        assert len(result.failures) == 1
        assert result.failures[0].kind == "ec2"
        assert result.failures[0].region == "us-west-2"
        assert "region unreachable" in result.failures[0].message
        assert sorted(result.inventory.units) == [("ebs", "us-west-2"), ("ec2", "us-east-1")]
        assert result.inventory.count == 3

    def test_garbled_creation_date_fails_unit(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a resource with an unreadable creation date is never inventoried as undated."""
        adapter = AmiAdapter()
        pages = {
            "us-east-1": [{"Images": [{"ImageId": "ami-ok"}, {"ImageId": "ami-bad", "CreationDate": "soon"}]}],
            "us-west-2": [{"Images": [{"ImageId": "ami-west", "CreationDate": "2020-01-01T00:00:00.000Z"}]}],
            "eu-west-1": [{"Images": []}],
        }

        def create_client(region: str) -> Mock:
            client = Mock()
            client.get_paginator.return_value.paginate.return_value = pages[region]
            return client

        monkeypatch.setattr(adapter, "_create_client", create_client)

        result = DiscoveryOrchestrator(AdapterRegistry([adapter]), build_engine()).discover()

        assert [(f.kind, f.region) for f in result.failures] == [("ami", "us-east-1")]
        assert "Invalid timestamp" in result.failures[0].message
        assert [r.identifier for r in result.inventory] == ["ami-west"]

    def test_all_units_fail(self, ec2: FakeAdapter) -> None:
        """Test every failure is reported and the inventory stays empty."""
        ec2.list_errors = {region: RuntimeError("denied") for region in REGIONS}

        result = DiscoveryOrchestrator(AdapterRegistry([ec2]), build_engine()).discover()

        assert result.inventory.is_empty
        assert [f.region for f in result.failures] == sorted(REGIONS)

    def test_descriptor_reporting_other_region_dropped(self) -> None:
        """Test regional units only keep resources from their own region."""
        adapter = FakeAdapter(
            "ec2",
            resources={"us-east-1": [create_descriptor("i-1"), create_descriptor("i-stray", region="eu-west-1")]},
        )

        result = DiscoveryOrchestrator(AdapterRegistry([adapter]), build_engine()).discover()

        assert [r.identifier for r in result.inventory] == ["i-1"]

    def test_order_is_stable_across_runs(self, ec2: FakeAdapter, s3: FakeAdapter) -> None:
        """Test identical inputs give identical inventory order."""
        registry = AdapterRegistry([ec2, s3])

        first = DiscoveryOrchestrator(registry, build_engine(), max_workers=8).discover()
        second = DiscoveryOrchestrator(registry, build_engine(), max_workers=1).discover()

        assert [r.identifier for r in first.inventory] == [r.identifier for r in second.inventory]

    def test_units(self, ec2: FakeAdapter, s3: FakeAdapter) -> None:
        """Test unit enumeration models the global/regional split."""
        orchestrator = DiscoveryOrchestrator(AdapterRegistry([ec2, s3]), build_engine(excluded=["eu-west-1"]))

        units = [(adapter.kind, region) for adapter, region in orchestrator.units()]

        assert units == [("ec2", "us-east-1"), ("ec2", "us-west-2"), ("s3", GLOBAL_REGION)]

    def test_no_adapters(self) -> None:
        """Test an empty registry discovers nothing."""
        result = DiscoveryOrchestrator(AdapterRegistry(), build_engine()).discover()

        assert result.inventory.is_empty
        assert result.failures == []

    def test_invalid_max_workers(self) -> None:
        """Test the worker bound must be positive."""
        with pytest.raises(ValueError):
            DiscoveryOrchestrator(AdapterRegistry(), build_engine(), max_workers=0)
