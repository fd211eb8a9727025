"""Versioned default manifests: version parsing, discovery, resolution, loading."""

from kubedrift.manifests.version import Version, compare_versions
from kubedrift.manifests.scanner import scan_versions
from kubedrift.manifests.resolver import fallback_priority, resolve_manifest
from kubedrift.manifests.loader import load_object, load_targets, load_yaml

__all__ = [
    "Version",
    "compare_versions",
    "fallback_priority",
    "load_object",
    "load_targets",
    "load_yaml",
    "resolve_manifest",
    "scan_versions",
]
