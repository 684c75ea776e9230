"""Configuration loading.

Precedence, lowest to highest: built-in defaults, YAML config file,
environment variables, command-line options.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..models.scope import UndatedPolicy

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".cloud-nuke" / "config.yaml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class Config:
    """cloud-nuke configuration.

    Attributes:
        aws_profile: AWS profile name (optional)
        gcp_project: GCP project ID (optional)
        log_level: Default log level
        max_workers: Concurrent (kind, region) units
        force_delay_seconds: Countdown length when --force is used
        undated_policy: Treatment of resources without a creation time
        fail_on_discovery_error: Abort when any listing call fails
        audit_enabled: Write a YAML log for every run
        audit_dir: Audit log directory (default: ~/.cloud-nuke/audit-logs)
    """

    aws_profile: Optional[str] = None
    gcp_project: Optional[str] = None
    log_level: str = "INFO"
    max_workers: int = 10
    force_delay_seconds: int = 10
    undated_policy: UndatedPolicy = UndatedPolicy.ELIGIBLE
    fail_on_discovery_error: bool = False
    audit_enabled: bool = True
    audit_dir: Optional[str] = None

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Config":
        """Load configuration from file and environment.

        Args:
            path: Config file path (default: $CLOUD_NUKE_CONFIG or ~/.cloud-nuke/config.yaml)

        Raises:
            ValueError: If a value is invalid or an explicit config file is missing
        """
        config = cls()

        explicit = path or os.environ.get("CLOUD_NUKE_CONFIG")
        config_path = Path(explicit).expanduser() if explicit else DEFAULT_CONFIG_PATH
        if config_path.exists():
            config.update(cls._read_file(config_path))
        elif explicit:
            raise ValueError(f"Config file not found: {config_path}")

        config.update(cls._read_env())
        config.validate()
        return config

    @staticmethod
    def _read_file(path: Path) -> Dict[str, Any]:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        logger.debug(f"Loaded config from {path}")
        return data

    @staticmethod
    def _read_env() -> Dict[str, Any]:
        env_map = {
            "AWS_PROFILE": "aws_profile",
            "CLOUDSDK_CORE_PROJECT": "gcp_project",
            "CLOUD_NUKE_LOG_LEVEL": "log_level",
            "CLOUD_NUKE_MAX_WORKERS": "max_workers",
            "CLOUD_NUKE_AUDIT_DIR": "audit_dir",
        }
        return {key: os.environ[var] for var, key in env_map.items() if os.environ.get(var)}

    def update(self, values: Dict[str, Any]) -> None:
        """Apply raw values, coercing them to the field types.

        Raises:
            ValueError: On unknown keys or values that cannot be coerced
        """
        known = {f.name for f in fields(self)}
        for key, value in values.items():
            key = key.replace("-", "_")
            if key not in known:
                raise ValueError(f"Unknown config key: {key}")
            if value is None:
                continue
            setattr(self, key, self._coerce(key, value))

    def _coerce(self, key: str, value: Any) -> Any:
        if key in ("max_workers", "force_delay_seconds"):
            try:
                return int(value)
            except (TypeError, ValueError):
                raise ValueError(f"Invalid value for {key}: {value!r}")
        if key in ("fail_on_discovery_error", "audit_enabled"):
            if isinstance(value, bool):
                return value
            return str(value).strip().lower() in _TRUE_VALUES
        if key == "undated_policy":
            if isinstance(value, UndatedPolicy):
                return value
            try:
                return UndatedPolicy(str(value).lower())
            except ValueError:
                valid = ", ".join(p.value for p in UndatedPolicy)
                raise ValueError(f"Invalid value for undated_policy: {value!r} (expected one of: {valid})")
        if key == "log_level":
            return str(value).upper()
        return str(value)

    def validate(self) -> None:
        """Check value ranges.

        Raises:
            ValueError: If any value is out of range
        """
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if self.force_delay_seconds < 0:
            raise ValueError("force_delay_seconds must not be negative")
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {self.log_level}")
