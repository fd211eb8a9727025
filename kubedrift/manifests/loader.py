"""YAML loading for target lists and manifests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from kubedrift.errors import ManifestLoadError
from kubedrift.models.objects import K8sObject
from kubedrift.models.target import Target


def load_yaml(path: Path) -> Any:
    """Read and decode a single YAML document.

    Raises:
        ManifestLoadError: the file is unreadable or not valid YAML.
    """
    try:
        with open(path, encoding="utf-8") as fh:
            return yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        raise ManifestLoadError(path, exc) from exc


def load_targets(path: Path) -> list[Target]:
    """Load the ordered target list.  An empty document is an empty list."""
    raw = load_yaml(path)
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ManifestLoadError(path, f"expected a list of targets, got {type(raw).__name__}")
    targets = []
    for entry in raw:
        if not isinstance(entry, dict):
            raise ManifestLoadError(path, f"target entry must be a mapping: {entry!r}")
        try:
            targets.append(Target.from_dict(entry))
        except ValueError as exc:
            raise ManifestLoadError(path, exc) from exc
    return targets


def load_object(path: Path) -> K8sObject:
    """Load a manifest holding one resource or a ``List`` of resources."""
    raw = load_yaml(path)
    if raw is None:
        raise ManifestLoadError(path, "manifest is empty")
    try:
        return K8sObject.from_dict(raw)
    except ValueError as exc:
        raise ManifestLoadError(path, exc) from exc
