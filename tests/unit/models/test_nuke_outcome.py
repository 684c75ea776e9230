"""Tests for deletion outcome models."""

from __future__ import annotations

import pytest

from cloud_nuke.models.outcome import DeletionRecord, DeletionStatus, NukeOutcome
from tests.fixtures.resources import NOW, create_descriptor


class TestDeletionRecord:
    """Test suite for DeletionRecord."""

    def test_failed_record_requires_error_message(self) -> None:
        """Test validation of failed records."""
        record = DeletionRecord(resource=create_descriptor(), status=DeletionStatus.FAILED)

        with pytest.raises(ValueError, match="requires error_message"):
            record.validate()

    def test_succeeded_record_cannot_have_error(self) -> None:
        """Test validation of succeeded records."""
        record = DeletionRecord(resource=create_descriptor(), status=DeletionStatus.SUCCEEDED, error_message="boom")

        with pytest.raises(ValueError, match="cannot have an error"):
            record.validate()

    def test_valid_records(self) -> None:
        """Test valid records pass validation."""
        assert DeletionRecord(resource=create_descriptor(), status=DeletionStatus.SUCCEEDED).validate() is True
        assert (
            DeletionRecord(resource=create_descriptor(), status=DeletionStatus.FAILED, error_message="x").validate()
            is True
        )

    def test_to_dict(self) -> None:
        """Test serialization includes the resource and result."""
        record = DeletionRecord(
            resource=create_descriptor("i-1"),
            status=DeletionStatus.FAILED,
            error_message="UnauthorizedOperation: denied",
            timestamp=NOW,
        )

        data = record.to_dict()

        assert data["identifier"] == "i-1"
        assert data["status"] == "failed"
        assert data["error_message"] == "UnauthorizedOperation: denied"
        assert data["timestamp"] == NOW.isoformat()


class TestNukeOutcome:
    """Test suite for NukeOutcome."""

    def test_empty_outcome(self) -> None:
        """Test counts of an empty outcome."""
        outcome = NukeOutcome()

        assert outcome.attempted_count == 0
        assert outcome.failed_count == 0
        assert outcome.has_failures is False
        assert outcome.failures == []

    def test_counts_and_failures(self) -> None:
        """Test aggregate counts and the failure list."""
        ok = create_descriptor("i-1")
        bad = create_descriptor("i-2")
        outcome = NukeOutcome(
            records=[
                DeletionRecord(resource=ok, status=DeletionStatus.SUCCEEDED),
                DeletionRecord(resource=bad, status=DeletionStatus.FAILED, error_message="denied"),
            ]
        )

        assert outcome.attempted_count == 2
        assert outcome.succeeded_count == 1
        assert outcome.failed_count == 1
        assert outcome.has_failures is True
        assert outcome.failures == [(bad, "denied")]
