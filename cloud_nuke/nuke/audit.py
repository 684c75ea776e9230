"""Audit storage for nuke runs.

Stores and retrieves run logs in YAML format so every deletion can be traced
after the fact.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import List, Optional

import yaml

from ..models.inventory import Inventory
from ..models.run import NukeRun
from ..utils.timeutil import parse_timestamp, utcnow


class AuditStorage:
    """Run log storage and retrieval.

    Storage structure:
        ~/.cloud-nuke/audit-logs/
            2026/
                10/
                    run-run_123.yaml

    Attributes:
        storage_dir: Base directory for audit logs
    """

    def __init__(self, storage_dir: Optional[str] = None) -> None:
        """Initialize audit storage.

        Args:
            storage_dir: Base directory for audit logs (default: ~/.cloud-nuke/audit-logs)
        """
        if storage_dir is None:
            storage_dir = str(Path.home() / ".cloud-nuke" / "audit-logs")

        self.storage_dir = Path(storage_dir).expanduser()
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def log_run(self, run: NukeRun, inventory: Optional[Inventory] = None) -> Path:
        """Write the run log, overwriting any log with the same run ID.

        Args:
            run: Run to log
            inventory: Inventory shown for confirmation (logged for aborted runs)

        Returns:
            Path of the written file
        """
        year_month_dir = self.storage_dir / str(run.started_at.year) / f"{run.started_at.month:02d}"
        year_month_dir.mkdir(parents=True, exist_ok=True)

        audit_data = {
            "metadata": {
                "version": "1.0",
                "log_type": "nuke_run",
                "created_at": utcnow().isoformat(),
            },
            "run": run.summary(),
            "discovery_failures": [
                {"kind": f.kind, "region": f.region, "message": f.message} for f in run.discovery_failures
            ],
            "inventory": [resource.to_dict() for resource in inventory] if inventory is not None else [],
            "records": [record.to_dict() for record in run.outcome.records] if run.outcome else [],
        }

        audit_file = year_month_dir / f"run-{run.run_id}.yaml"
        with open(audit_file, "w") as f:
            yaml.safe_dump(audit_data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
        return audit_file

    def get_run(self, run_id: str) -> Optional[dict]:
        """Retrieve a run log by ID, or None if not found."""
        for audit_file in self.storage_dir.glob(f"*/*/run-{run_id}.yaml"):
            with open(audit_file, "r") as f:
                return yaml.safe_load(f)
        return None

    def query_runs(self, since: Optional[datetime] = None, until: Optional[datetime] = None) -> List[dict]:
        """Query runs started within a date range (both ends inclusive)."""
        since = parse_timestamp(since)
        until = parse_timestamp(until)
        results = []

        for audit_file in sorted(self.storage_dir.glob("*/*/run-*.yaml")):
            with open(audit_file, "r") as f:
                audit_data = yaml.safe_load(f)

            started_at = parse_timestamp(audit_data["run"]["started_at"])
            if since and started_at < since:
                continue
            if until and started_at > until:
                continue

            results.append(audit_data)

        results.sort(key=lambda data: data["run"]["started_at"])
        return results
