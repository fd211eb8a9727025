"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kubedrift.manifests.version import Version


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "warning"
    format: str = "console"


@dataclass
class DriftConfig:
    """Top-level kubedrift run configuration."""

    target_path: Path
    manifest_dir: Path
    kubeconfig: Path | None = None
    cluster_version: Version | None = None
    fallback: bool = True
    color: bool = True
    log: LogConfig = field(default_factory=LogConfig)
