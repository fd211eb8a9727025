"""Discovery of the version directories available under a manifest root."""

from __future__ import annotations

from pathlib import Path

from kubedrift.errors import ParseError
from kubedrift.manifests.version import Version
from kubedrift.observability.logging import get_logger

_log = get_logger("manifests.scanner")


def scan_versions(root: Path) -> list[Version]:
    """Return the versions that have a directory under *root*, oldest first.

    Directory names that are not versions are skipped with a warning.
    """
    root = Path(root)
    if not root.is_dir():
        _log.warning("manifest_root_missing", root=str(root))
        return []

    versions: list[Version] = []
    for entry in root.iterdir():
        if not entry.is_dir():
            continue
        try:
            versions.append(Version.parse(entry.name))
        except ParseError:
            _log.warning("manifest_dir_not_a_version", root=str(root), name=entry.name)
    versions.sort()
    return versions
