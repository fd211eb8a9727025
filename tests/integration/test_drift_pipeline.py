"""Integration tests for the full drift pipeline.

Each test exercises: target list load -> manifest resolution (with fallback)
-> manifest load -> live-state diff -> formatted report.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any

import pytest

from kubedrift.diff.engine import ObjectDiffer
from kubedrift.manifests.loader import load_targets
from kubedrift.manifests.version import Version
from kubedrift.models.objects import K8sObject
from kubedrift.report import OutputFormatter
from kubedrift.runner import run_targets

pytestmark = pytest.mark.integration


async def _run(
    targets_file: Path,
    manifest_root: Path,
    cluster: Any,
    version: str = "4.11.0",
    fallback: bool = True,
) -> tuple[list, str, str]:
    out, err = io.StringIO(), io.StringIO()
    reports = await run_targets(
        load_targets(targets_file),
        manifest_root=manifest_root,
        version=Version.parse(version),
        fallback=fallback,
        differ=ObjectDiffer(cluster),
        formatter=OutputFormatter(color=False, out=out, err=err),
    )
    return reports, out.getvalue(), err.getvalue()


class TestDriftPipeline:
    async def test_reports_every_category(
        self,
        targets_file: Path,
        manifest_root: Path,
        drifted_cluster: Any,
    ) -> None:
        reports, out, err = await _run(targets_file, manifest_root, drifted_cluster)

        assert [r.label for r in reports] == ["# mcp.yaml", "# monitoring.yaml", "# proxy.yaml", "# dns.yaml"]

        mcp = reports[0].result
        assert mcp is not None
        assert mcp.missing == []
        assert mcp.extra == ["machineconfiguration.openshift.io/v1 MachineConfigPool infra"]
        [changed] = mcp.changed
        assert changed.startswith("machineconfiguration.openshift.io/v1 MachineConfigPool worker\n")
        assert "spec.paused:" in changed

        monitoring = reports[1].result
        assert monitoring is not None
        assert monitoring.missing == ["v1 ConfigMap openshift-monitoring/cluster-monitoring-config"]

        assert reports[2].skipped is not None
        assert reports[2].result is None

        dns = reports[3].result
        assert dns is not None and dns.equal

        assert "used 4.11.2 instead of 4.11.0" in err
        assert "skipped due to error" in err
        assert out.endswith("# dns.yaml\nNo diff.\n\n")

    async def test_ignore_path_hides_rendered_config_drift(
        self,
        targets_file: Path,
        manifest_root: Path,
        drifted_cluster: Any,
    ) -> None:
        reports, out, _ = await _run(targets_file, manifest_root, drifted_cluster)
        assert "rendered-master" not in out
        assert all("MachineConfigPool master" not in entry for entry in reports[0].result.changed)

    async def test_fallback_disabled_skips_unversioned_targets(
        self,
        targets_file: Path,
        manifest_root: Path,
        drifted_cluster: Any,
    ) -> None:
        reports, _, _ = await _run(targets_file, manifest_root, drifted_cluster, fallback=False)
        assert all(r.skipped is not None for r in reports)
        assert drifted_cluster.calls == []

    async def test_newer_cluster_uses_exact_then_older(
        self,
        targets_file: Path,
        manifest_root: Path,
        drifted_cluster: Any,
    ) -> None:
        reports, _, err = await _run(targets_file, manifest_root, drifted_cluster, version="4.12.0")
        assert reports[3].resolution is not None
        assert reports[3].resolution.notice is None
        assert reports[0].resolution is not None
        assert reports[0].resolution.version == Version.parse("4.11.2")
        assert "used 4.11.2 instead of 4.12.0" in err

    async def test_unserved_kind_does_not_stop_the_run(
        self,
        targets_file: Path,
        manifest_root: Path,
        cluster_factory: Any,
    ) -> None:
        dns = K8sObject(
            api_version="operator.openshift.io/v1",
            kind="DNS",
            name="default",
            spec={"logLevel": "Trace"},
        )
        cluster = cluster_factory([dns], unserved={"MachineConfigPool"})
        reports, out, _ = await _run(targets_file, manifest_root, cluster)
        assert reports[0].skipped is not None and "MachineConfigPool" in reports[0].skipped
        assert reports[3].result is not None
        assert "spec.logLevel:" in out
        assert "spec.nodePlacement:" in out
