"""GCP project context.

One context is built per run from application default credentials and passed
explicitly to every GCP adapter.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional

import google.auth
from google.cloud import compute_v1

logger = logging.getLogger(__name__)


def _last_segment(url: str) -> str:
    """Extract the resource name from a full GCP resource URL."""
    return url.rstrip("/").split("/")[-1]


class GcpContext:
    """Project, credentials and region/zone topology for one run.

    Attributes:
        project: GCP project ID
        credentials: google-auth credentials
    """

    def __init__(self, project: str, credentials: Any = None) -> None:
        self.project = project
        self.credentials = credentials
        self._zones_by_region: Optional[Dict[str, List[str]]] = None
        self._lock = threading.Lock()

    @classmethod
    def default(cls, project: Optional[str] = None) -> "GcpContext":
        """Build a context from application default credentials.

        Args:
            project: Project ID override; defaults to the credentials' project

        Raises:
            ValueError: If no project can be determined
        """
        credentials, default_project = google.auth.default()
        project = project or default_project
        if not project:
            raise ValueError("No GCP project configured. Use --project or set CLOUDSDK_CORE_PROJECT.")
        return cls(project=project, credentials=credentials)

    def regions_client(self) -> compute_v1.RegionsClient:
        return compute_v1.RegionsClient(credentials=self.credentials)

    def instances_client(self) -> compute_v1.InstancesClient:
        return compute_v1.InstancesClient(credentials=self.credentials)

    def _load_topology(self) -> Dict[str, List[str]]:
        with self._lock:
            if self._zones_by_region is None:
                zones_by_region: Dict[str, List[str]] = {}
                for region in self.regions_client().list(project=self.project):
                    zones_by_region[region.name] = sorted(_last_segment(zone) for zone in region.zones)
                self._zones_by_region = zones_by_region
                logger.debug(f"Found {len(zones_by_region)} GCP regions for project {self.project}")
            return self._zones_by_region

    def regions(self) -> List[str]:
        return sorted(self._load_topology())

    def zones(self, region: str) -> List[str]:
        return list(self._load_topology().get(region, []))

    def contains_region(self, region: str) -> bool:
        return region in self._load_topology()
