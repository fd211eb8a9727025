"""Shared fixtures for kubedrift integration tests.

Provides an on-disk manifest tree with several version directories and an
in-memory live-state provider, so full runs can be exercised without a
Kubernetes cluster.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from kubedrift.errors import NotFoundInCluster, ResourceLocatorError
from kubedrift.models.objects import K8sObject

# ---------------------------------------------------------------------------
# Default manifests, as gathered from freshly installed clusters
# ---------------------------------------------------------------------------

_MCP_LIST = {
    "apiVersion": "v1",
    "kind": "List",
    "items": [
        {
            "apiVersion": "machineconfiguration.openshift.io/v1",
            "kind": "MachineConfigPool",
            "metadata": {"name": "master"},
            "spec": {
                "configuration": {"name": "rendered-master-aaa"},
                "maxUnavailable": 1,
                "paused": False,
            },
        },
        {
            "apiVersion": "machineconfiguration.openshift.io/v1",
            "kind": "MachineConfigPool",
            "metadata": {"name": "worker"},
            "spec": {
                "configuration": {"name": "rendered-worker-bbb"},
                "maxUnavailable": 1,
                "paused": False,
            },
        },
    ],
}

_MONITORING_CM = {
    "apiVersion": "v1",
    "kind": "ConfigMap",
    "metadata": {"name": "cluster-monitoring-config", "namespace": "openshift-monitoring"},
    "data": {"config.yaml": "enableUserWorkload: false\n"},
}

_DNS = {
    "apiVersion": "operator.openshift.io/v1",
    "kind": "DNS",
    "metadata": {"name": "default"},
    "spec": {"logLevel": "Normal", "nodePlacement": {}, "upstreamResolvers": {"policy": "Sequential"}},
}


def make_live(raw: dict[str, Any], **spec_overrides: Any) -> K8sObject:
    """Decode *raw* as a live object, optionally overriding spec keys."""
    body = dict(raw)
    if spec_overrides:
        body["spec"] = {**(raw.get("spec") or {}), **spec_overrides}
    return K8sObject.from_dict(body)


class InMemoryCluster:
    """LiveStateProvider over a fixed set of objects keyed by (apiVersion, kind)."""

    def __init__(self, objects: list[K8sObject], unserved: set[str] | None = None) -> None:
        self._objects = objects
        self._unserved = unserved or set()
        self.calls: list[str] = []

    async def resolve_locator(self, api_version: str, kind: str) -> tuple[str, str]:
        self.calls.append(f"resolve {kind}")
        if kind in self._unserved:
            raise ResourceLocatorError(api_version, kind)
        return (api_version, kind)

    async def get(self, locator: tuple[str, str], name: str, namespace: str = "") -> K8sObject:
        self.calls.append(f"get {locator[1]} {name}")
        for obj in self._objects:
            if (obj.api_version, obj.kind) == locator and obj.name == name and obj.namespace == namespace:
                return obj
        raise NotFoundInCluster(locator[1], name, namespace)

    async def list(self, locator: tuple[str, str]) -> list[K8sObject]:
        self.calls.append(f"list {locator[1]}")
        return [obj for obj in self._objects if (obj.api_version, obj.kind) == locator]


@pytest.fixture
def manifest_root(tmp_path: Path) -> Path:
    """Manifest tree: 4.10.5 and 4.11.2 hold everything, 4.12.0 only the DNS manifest."""
    root = tmp_path / "default"
    layout = {
        "4.10.5": {"mcp.yaml": _MCP_LIST, "monitoring.yaml": _MONITORING_CM, "dns.yaml": _DNS},
        "4.11.2": {"mcp.yaml": _MCP_LIST, "monitoring.yaml": _MONITORING_CM, "dns.yaml": _DNS},
        "4.12.0": {"dns.yaml": _DNS},
    }
    for version, files in layout.items():
        for name, body in files.items():
            path = root / version / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(yaml.safe_dump(body))
    (root / "README").mkdir()
    return root


@pytest.fixture
def targets_file(tmp_path: Path) -> Path:
    path = tmp_path / "targets.yaml"
    path.write_text(
        yaml.safe_dump(
            [
                {
                    "apiVersion": "machineconfiguration.openshift.io/v1",
                    "kind": "MachineConfigPool",
                    "manifest": "mcp.yaml",
                    "ignore": ["configuration.name"],
                },
                {"apiVersion": "v1", "kind": "ConfigMap", "manifest": "monitoring.yaml"},
                {"apiVersion": "config.openshift.io/v1", "kind": "Proxy", "manifest": "proxy.yaml"},
                {"apiVersion": "operator.openshift.io/v1", "kind": "DNS", "manifest": "dns.yaml"},
            ]
        )
    )
    return path


@pytest.fixture
def cluster_factory() -> type[InMemoryCluster]:
    return InMemoryCluster


@pytest.fixture
def drifted_cluster() -> InMemoryCluster:
    """Live state with one paused pool, an extra pool, a missing ConfigMap and an unchanged DNS."""
    master = make_live(_MCP_LIST["items"][0], configuration={"name": "rendered-master-zzz"})
    worker = make_live(_MCP_LIST["items"][1], paused=True)
    infra = make_live(
        {
            "apiVersion": "machineconfiguration.openshift.io/v1",
            "kind": "MachineConfigPool",
            "metadata": {"name": "infra"},
            "spec": {"paused": False},
        }
    )
    dns = make_live(_DNS)
    return InMemoryCluster([master, worker, infra, dns])
