"""Cluster access: live-state provider and cluster version detection."""

from kubedrift.cluster.client import KubernetesLiveState, LiveStateProvider, list_items

__all__ = ["KubernetesLiveState", "LiveStateProvider", "list_items"]
