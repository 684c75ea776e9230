"""Tests for AdapterRegistry."""

from __future__ import annotations

import pytest

from cloud_nuke.adapters.aws import build_registry as build_aws_registry
from cloud_nuke.adapters.base import AdapterRegistry
from cloud_nuke.adapters.gcp import GcpContext
from cloud_nuke.adapters.gcp import build_registry as build_gcp_registry
from tests.fixtures.resources import FakeAdapter


class TestAdapterRegistry:
    """Test suite for AdapterRegistry."""

    def test_register_and_get(self) -> None:
        """Test adapters are looked up by kind."""
        adapter = FakeAdapter("ec2")
        registry = AdapterRegistry([adapter])

        assert registry.get("ec2") is adapter
        assert "ec2" in registry
        assert len(registry) == 1

    def test_duplicate_kind_rejected(self) -> None:
        """Test a kind can only be registered once."""
        registry = AdapterRegistry([FakeAdapter("ec2")])

        with pytest.raises(ValueError):
            registry.register(FakeAdapter("ec2"))

    def test_unknown_kind(self) -> None:
        """Test looking up an unregistered kind raises KeyError."""
        with pytest.raises(KeyError):
            AdapterRegistry().get("ec2")

    def test_regional_and_global_split(self) -> None:
        """Test adapters are split by listing granularity, sorted by kind."""
        registry = AdapterRegistry([FakeAdapter("s3", is_global=True), FakeAdapter("ec2"), FakeAdapter("asg")])

        assert [a.kind for a in registry.regional()] == ["asg", "ec2"]
        assert [a.kind for a in registry.global_()] == ["s3"]
        assert [a.kind for a in registry] == ["asg", "ec2", "s3"]


class TestProviderRegistries:
    """Test the provider registries wire up every supported kind."""

    def test_aws_registry(self) -> None:
        """Test the AWS registry holds all nine kinds, with S3 global."""
        registry = build_aws_registry("sandbox")

        assert registry.kinds() == ["ami", "asg", "ebs", "ec2", "eip", "elb", "elbv2", "s3", "snap"]
        assert [a.kind for a in registry.global_()] == ["s3"]
        assert all(a.profile_name == "sandbox" for a in registry)

    def test_gcp_registry(self) -> None:
        """Test the GCP registry holds GCE instances."""
        registry = build_gcp_registry(GcpContext(project="sandbox"))

        assert registry.kinds() == ["gce-instance"]
        assert registry.global_() == []
