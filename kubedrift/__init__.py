"""kubedrift: compare default cluster manifests against live cluster state."""

__version__ = "0.3.1"
