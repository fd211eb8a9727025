"""Core data structures for kubedrift."""

from kubedrift.models.config import DriftConfig, LogConfig
from kubedrift.models.objects import CONFIGMAP_KIND, K8sObject
from kubedrift.models.results import DiffResult, Resolution, TargetReport
from kubedrift.models.target import Target

__all__ = [
    "CONFIGMAP_KIND",
    "DiffResult",
    "DriftConfig",
    "K8sObject",
    "LogConfig",
    "Resolution",
    "Target",
    "TargetReport",
]
