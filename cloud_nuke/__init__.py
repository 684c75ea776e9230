"""cloud-nuke - discover and delete cloud resources across regions."""

__version__ = "0.1.0"
