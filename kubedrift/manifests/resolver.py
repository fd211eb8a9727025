"""Version-aware manifest resolution with nearest-version fallback."""

from __future__ import annotations

import bisect
from collections.abc import Sequence
from pathlib import Path

from kubedrift.errors import ResolutionFailure, ResolutionReason
from kubedrift.manifests.scanner import scan_versions
from kubedrift.manifests.version import Version
from kubedrift.models.results import Resolution
from kubedrift.observability.logging import get_logger

_log = get_logger("manifests.resolver")


def fallback_priority(target: Version, available: Sequence[Version]) -> list[Version]:
    """Order *available* by preference as a substitute for *target*.

    Versions at or above *target* come first, closest first; older versions
    follow, newest first.  *available* must already be sorted ascending.
    """
    idx = bisect.bisect_left(available, target)
    return list(available[idx:]) + list(reversed(available[:idx]))


def resolve_manifest(
    manifest_root: Path,
    version: Version,
    relative_path: str,
    fallback: bool = True,
) -> Resolution:
    """Locate *relative_path* for *version* under *manifest_root*.

    Raises:
        ResolutionFailure: ``NotFound`` when the exact file is absent and
            fallback is disabled, ``Exhausted`` when no version has it.
    """
    manifest_root = Path(manifest_root)
    exact = manifest_root / str(version) / relative_path
    if exact.is_file():
        return Resolution(path=exact, version=version)

    if not fallback:
        raise ResolutionFailure(ResolutionReason.NOT_FOUND, relative_path, version)

    for candidate in fallback_priority(version, scan_versions(manifest_root)):
        path = manifest_root / str(candidate) / relative_path
        if not path.is_file():
            continue
        notice = f"used {candidate} instead of {version}"
        _log.info("manifest_fallback", manifest=relative_path, requested=str(version), used=str(candidate))
        return Resolution(path=path, version=candidate, notice=notice)

    raise ResolutionFailure(ResolutionReason.EXHAUSTED, relative_path, version)
