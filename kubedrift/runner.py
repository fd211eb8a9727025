"""Target orchestration loop.

Targets are processed one at a time, in list order.  Each pass resolves the
manifest for the cluster version, loads it and diffs it against live state.
Any failure inside a pass is reported as a skip for that target only.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

from kubedrift.diff.engine import ObjectDiffer
from kubedrift.errors import DriftError
from kubedrift.manifests.loader import load_object
from kubedrift.manifests.resolver import resolve_manifest
from kubedrift.manifests.version import Version
from kubedrift.models.objects import K8sObject
from kubedrift.models.results import TargetReport
from kubedrift.models.target import Target
from kubedrift.observability.logging import get_logger
from kubedrift.report import OutputFormatter

_log = get_logger("runner")


async def run_targets(
    targets: Sequence[Target],
    *,
    manifest_root: Path,
    version: Version,
    fallback: bool,
    differ: ObjectDiffer,
    formatter: OutputFormatter,
    loader: Callable[[Path], K8sObject] = load_object,
) -> list[TargetReport]:
    """Check every target and print its block.  Never raises for a single target."""
    reports = []
    for target in targets:
        formatter.header(target.label)
        report = TargetReport(target=target)
        try:
            report.resolution = resolve_manifest(manifest_root, version, target.manifest, fallback)
            if report.resolution.notice:
                formatter.notice(report.resolution.notice)
            desired = loader(report.resolution.path)
            report.result = await differ.diff(target, desired)
        except DriftError as exc:
            _log.warning("target_skipped", manifest=target.manifest, kind=target.kind, error=str(exc))
            report.skipped = str(exc)
        except Exception as exc:  # noqa: BLE001
            _log.warning(
                "target_skipped_unexpected_error",
                manifest=target.manifest,
                kind=target.kind,
                error=repr(exc),
            )
            report.skipped = repr(exc)

        if report.skipped is not None:
            formatter.skipped(report.skipped)
        elif report.result is not None:
            formatter.result(report.result)
        reports.append(report)

    _log.info(
        "run finished",
        targets=len(reports),
        skipped=sum(1 for r in reports if r.skipped is not None),
        drifted=sum(1 for r in reports if r.result is not None and not r.result.equal),
    )
    return reports
